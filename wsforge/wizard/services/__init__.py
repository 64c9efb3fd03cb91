"""External collaborators of the wizard.

``base`` declares the protocols the controller depends on; ``http`` is the
portal API implementation used by the CLI.
"""

from wsforge.wizard.services.base import (
    ApiError,
    CatalogService,
    NavigationSink,
    NotificationSink,
    ProvisioningService,
)

__all__ = [
    "ApiError",
    "CatalogService",
    "NavigationSink",
    "NotificationSink",
    "ProvisioningService",
]
