from starlette.requests import HTTPConnection

from .connection_registry import ConnectionRegistry


def get_connection_registry(connection: HTTPConnection) -> ConnectionRegistry:
    """Dependency returning the registry owned by the running application"""
    return connection.app.state.connection_registry
