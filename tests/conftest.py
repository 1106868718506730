"""Shared test fixtures for pipeline-notifier."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests

from pipeline_notifier.models.events import DetailType, PipelineEvent

PIPELINE_CHANGE = DetailType.PIPELINE_STATE_CHANGE.value
STAGE_CHANGE = DetailType.STAGE_STATE_CHANGE.value
ACTION_CHANGE = DetailType.ACTION_STATE_CHANGE.value
CLOUDTRAIL = DetailType.CLOUDTRAIL_API_CALL.value

SLACK_WEBHOOK = "https://hooks.slack.com/services/T00/B00/xxx"


# ---------------------------------------------------------------------------
# Event and record builders
# ---------------------------------------------------------------------------


def event_dict(
    detail_type: str = PIPELINE_CHANGE,
    *,
    state: str = "STARTED",
    region: str = "eu-west-1",
    pipeline: str = "build",
    execution_id: str = "abc",
    stage: str | None = None,
    action: str | None = None,
) -> dict[str, Any]:
    """An EventBridge CodePipeline event in wire format."""
    detail: dict[str, Any] = {
        "pipeline": pipeline,
        "execution-id": execution_id,
        "state": state,
        "version": 1,
    }
    if stage is not None:
        detail["stage"] = stage
    if action is not None:
        detail["action"] = action
        detail["type"] = {"owner": "AWS", "category": "Build", "provider": "CodeBuild"}
    return {
        "version": "0",
        "id": "2e7e9a8b-0000-0000-0000-000000000000",
        "detail-type": detail_type,
        "source": "aws.codepipeline",
        "account": "123456789012",
        "time": "2024-03-01T12:00:00Z",
        "region": region,
        "resources": [f"arn:aws:codepipeline:{region}:123456789012:{pipeline}"],
        "detail": detail,
    }


def sqs_record(event: dict[str, Any], message_id: str = "msg-1") -> dict[str, Any]:
    """Wrap an event in an SNS notification inside an SQS record."""
    notification = {
        "Type": "Notification",
        "MessageId": f"sns-{message_id}",
        "TopicArn": "arn:aws:sns:eu-west-1:123456789012:codepipeline-events",
        "Message": json.dumps(event),
        "Timestamp": "2024-03-01T12:00:01.000Z",
    }
    return {
        "messageId": message_id,
        "eventSource": "aws:sqs",
        "body": json.dumps(notification),
    }


@pytest.fixture
def make_event() -> Callable[..., PipelineEvent]:
    """Factory for validated PipelineEvent instances."""

    def _make(detail_type: str = PIPELINE_CHANGE, **kwargs: Any) -> PipelineEvent:
        return PipelineEvent.model_validate(event_dict(detail_type, **kwargs))

    return _make


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records every POST instead of sending it.

    ``fail_urls`` maps a URL prefix to either an HTTP status code or an
    exception instance to raise for matching requests.
    """

    def __init__(self, fail_urls: dict[str, Any] | None = None) -> None:
        self.posts: list[dict[str, Any]] = []
        self._fail_urls = fail_urls or {}

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        for prefix, failure in self._fail_urls.items():
            if url.startswith(prefix):
                if isinstance(failure, Exception):
                    raise failure
                return FakeResponse(failure)
        return FakeResponse(202)

    def posts_to(self, prefix: str) -> list[dict[str, Any]]:
        return [p for p in self.posts if p["url"].startswith(prefix)]


@pytest.fixture
def http_session() -> FakeSession:
    return FakeSession()


# ---------------------------------------------------------------------------
# AWS fakes
# ---------------------------------------------------------------------------


class FakeEc2Client:
    def __init__(self, regions: list[str] | Exception) -> None:
        self._regions = regions

    def describe_regions(self) -> dict[str, Any]:
        if isinstance(self._regions, Exception):
            raise self._regions
        return {"Regions": [{"RegionName": r, "OptInStatus": "opt-in-not-required"} for r in self._regions]}


class FakeCodePipelineClient:
    """Serves canned ListPipelines pages and GetPipelineState responses.

    ``pages`` maps the incoming ``nextToken`` (``None`` for the first call)
    to ``(names, next_token)``.  ``states`` maps a pipeline name to a list
    of per-stage action status lists; ``None`` means an action that has
    never run.
    """

    def __init__(
        self,
        pages: dict[str | None, tuple[list[str], str | None]] | Exception | None = None,
        states: dict[str, list[list[str | None]]] | None = None,
        failing_pipelines: set[str] | None = None,
    ) -> None:
        self._pages = pages if pages is not None else {None: ([], None)}
        self._states = states or {}
        self._failing = failing_pipelines or set()
        self.list_calls: list[dict[str, Any]] = []

    def list_pipelines(self, **kwargs: Any) -> dict[str, Any]:
        self.list_calls.append(kwargs)
        if isinstance(self._pages, Exception):
            raise self._pages
        names, token = self._pages[kwargs.get("nextToken")]
        page: dict[str, Any] = {"pipelines": [{"name": n, "version": 1} for n in names]}
        if token:
            page["nextToken"] = token
        return page

    def get_pipeline_state(self, name: str) -> dict[str, Any]:
        if name in self._failing:
            raise RuntimeError(f"AccessDenied for {name}")
        stages = []
        for index, statuses in enumerate(self._states.get(name, [])):
            actions = []
            for position, status in enumerate(statuses):
                action: dict[str, Any] = {"actionName": f"action-{position}"}
                if status is not None:
                    action["latestExecution"] = {"status": status}
                actions.append(action)
            stages.append({"stageName": f"stage-{index}", "actionStates": actions})
        return {"pipelineName": name, "stageStates": stages}


def client_factory(
    ec2: FakeEc2Client, codepipeline: dict[str, FakeCodePipelineClient]
) -> Callable[[str, str], Any]:
    """A gateway client factory backed by the fakes above."""

    def _factory(service: str, region: str) -> Any:
        if service == "ec2":
            return ec2
        return codepipeline[region]

    return _factory
