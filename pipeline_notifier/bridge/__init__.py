"""Bridges to external AWS services."""

from pipeline_notifier.bridge.codepipeline import CodePipelineGateway, boto3_client_factory

__all__ = ["CodePipelineGateway", "boto3_client_factory"]
