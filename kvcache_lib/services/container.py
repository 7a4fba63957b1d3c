from typing import Any, Dict


class ServiceContainer:
    """Named singletons shared by the app and its request handlers.

    `create_app` registers the guarded cache and the active `Config`;
    handlers look them up through `resolve_service`.
    """

    def __init__(self) -> None:
        self._services: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._services[key] = instance

    def get(self, key: str) -> Any:
        try:
            return self._services[key]
        except KeyError:
            raise KeyError(f"No service registered for key '{key}'") from None
