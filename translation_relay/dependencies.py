"""
Dependency injection configuration for FastAPI.

Room and provider state is created by the application factory and kept on
`app.state`; these dependencies expose it to endpoints and can be
overridden in tests using `app.dependency_overrides`.

Example:
    ```python
    @router.get("/health")
    async def health_check(room_manager: RoomManagerDep) -> HealthResponse:
        ...
    ```
"""

from typing import Annotated

from fastapi import Depends, Request

from translation_relay.managers.room_manager import RoomManager
from translation_relay.providers.factory import Providers


def get_room_manager(request: Request) -> RoomManager:
    return request.app.state.room_manager


def get_providers(request: Request) -> Providers:
    return request.app.state.providers


RoomManagerDep = Annotated[RoomManager, Depends(get_room_manager)]
ProvidersDep = Annotated[Providers, Depends(get_providers)]
