from .animation_runtime import ButtonAnimationRuntime, FrameClock, RuntimeTick

__all__ = ["ButtonAnimationRuntime", "FrameClock", "RuntimeTick"]
