from autocomplete.api.app import build_app, create_app

__all__ = ("build_app", "create_app")
