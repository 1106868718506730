"""pipeline-notifier: CodePipeline notifications for Datadog and Slack.

Two AWS Lambda flows:
  - Event forwarder: SQS (SNS-wrapped EventBridge events) → Datadog events
    for every pipeline, stage and action change, plus a Slack attachment
    for pipeline-level changes.
  - Status poller: worst action status of every pipeline in every region,
    written as one JSON log line for a CloudWatch log-based metric.
"""

__version__ = "0.1.0"
