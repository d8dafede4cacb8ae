"""
Base API class for auto-discovery of controllers.

All API controllers should inherit from BaseAPI to be automatically
registered with the NinjaExtraAPI instance.
"""


class BaseAPI:
    """
    Marker class for API controllers.

    Example:
        @api_controller("/proposals", tags=["Proposals"])
        class ProposalController(BaseAPI):
            @http_get("/")
            def list_proposals(self):
                ...
    """
