from core.storage import get_storage


class StorageMiddleware:
    """
    Exposes the process-wide MemoryStorage as ``request.storage``.
    DRF's Request proxies unknown attributes to the Django request, so
    API views read it the same way.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.storage = get_storage()
        return self.get_response(request)
