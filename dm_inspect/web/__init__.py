from dm_inspect.web.app import create_app

__all__ = ["create_app"]
