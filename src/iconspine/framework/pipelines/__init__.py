"""Pipeline base classes and result types."""

from iconspine.framework.pipelines.base import Pipeline, PipelineResult, PipelineStatus

__all__ = ["Pipeline", "PipelineResult", "PipelineStatus"]
