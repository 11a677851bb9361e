"""
Registry of serializer implementations.
"""

from typing import Dict, Type, Union

from ..errors import ConfigurationError
from .base import Serializer
from .json_codec import JsonSerializer
from .native import NativeSerializer

DEFAULT_SERIALIZER = "native"

# Registry of available serializer implementations
_SERIALIZERS: Dict[str, Type[Serializer]] = {
    NativeSerializer.name: NativeSerializer,
    JsonSerializer.name: JsonSerializer,
}


def register_serializer(name: str, implementation: Type[Serializer]) -> None:
    """
    Register a new serializer implementation.

    Args:
        name: Name to register the implementation under
        implementation: Serializer subclass
    """
    _SERIALIZERS[name.lower()] = implementation


def available_serializers() -> list:
    """Get list of registered serializer names."""
    return list(_SERIALIZERS.keys())


def get_serializer(choice: Union[str, Serializer, None] = None) -> Serializer:
    """
    Resolve a serializer from a registered name or pass an instance through.

    Raises:
        ConfigurationError: If the name is not registered
    """
    if choice is None:
        choice = DEFAULT_SERIALIZER
    if isinstance(choice, Serializer):
        return choice

    implementation = _SERIALIZERS.get(str(choice).lower())
    if not implementation:
        raise ConfigurationError(
            f"Unsupported serializer: {choice}",
            config_key="serializer",
            config_value=choice,
        )
    return implementation()
