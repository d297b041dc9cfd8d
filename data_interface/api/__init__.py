from data_interface.api.router import api_router

__all__ = ["api_router"]
