from utils.get_endpoint import get_endpoint

__all__ = ["get_endpoint"]
