"""
iconspine framework - application infrastructure.

- Structured logging with context and timing (``iconspine.framework.logging``)
- Pipeline base classes (``iconspine.framework.pipelines``)
"""

from iconspine.framework.pipelines import Pipeline, PipelineResult, PipelineStatus

__all__ = ["Pipeline", "PipelineResult", "PipelineStatus"]
