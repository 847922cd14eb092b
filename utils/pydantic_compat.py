"""Compatibility utilities for Pydantic v1/v2 models and dataclasses."""
import dataclasses

def to_dict(model_instance):
    """
    Convert a model instance to a dictionary.
    Works with Pydantic v1 (.dict()), v2 (.model_dump()) and dataclasses.
    """
    if dataclasses.is_dataclass(model_instance) and not isinstance(model_instance, type):
        return dataclasses.asdict(model_instance)
    if hasattr(model_instance, 'model_dump'):
        return model_instance.model_dump()
    elif hasattr(model_instance, 'dict'):
        return model_instance.dict()
    else:
        # Fallback to dict conversion
        return dict(model_instance)
