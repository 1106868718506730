"""Inbound CodePipeline event models.

EventBridge delivers CodePipeline notifications with hyphenated keys
(``detail-type``, ``execution-id``).  The models accept those wire names
via aliases and expose snake_case attributes to Python code.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DetailType(str, Enum):
    """The EventBridge detail-types this adapter knows about."""

    PIPELINE_STATE_CHANGE = "CodePipeline Pipeline Execution State Change"
    STAGE_STATE_CHANGE = "CodePipeline Stage Execution State Change"
    ACTION_STATE_CHANGE = "CodePipeline Action Execution State Change"
    CLOUDTRAIL_API_CALL = "AWS API Call via CloudTrail"


class ActionType(BaseModel):
    """``detail.type`` block attached to action-level events."""

    model_config = ConfigDict(frozen=True)

    owner: str = ""
    category: str = ""
    provider: str = ""


class PipelineEventDetail(BaseModel):
    """``detail`` block of an event.

    Fields default to empty so that other detail shapes on the same topic
    (CloudTrail audit records) still decode and reach the filter.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pipeline: str = ""
    execution_id: str = Field(default="", alias="execution-id")
    state: str = ""
    stage: str | None = None
    action: str | None = None
    type: ActionType | None = None


class PipelineEvent(BaseModel):
    """One CodePipeline state-change notification.

    ``detail_type`` is kept as a plain string: unrecognised detail-types
    must survive decoding so the mapper can reject them explicitly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    detail_type: str = Field(alias="detail-type")
    time: str = ""
    region: str
    resources: list[str] = []
    detail: PipelineEventDetail

    @property
    def kind(self) -> DetailType | None:
        """The recognised detail-type, or ``None`` for anything else."""
        try:
            return DetailType(self.detail_type)
        except ValueError:
            return None

    @property
    def pipeline(self) -> str:
        return self.detail.pipeline

    @property
    def execution_id(self) -> str:
        return self.detail.execution_id

    @property
    def state(self) -> str:
        return self.detail.state
