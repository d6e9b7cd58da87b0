"""Tenant Views.

Tenant-scoped view resolution and loading for multi-tenant business
applications.

This package contains:
- A build-time view registry with one-hop tenant fallback
- Detail-view format detection across three authoring generations
- Adapters that give every generation one call contract
- A process-wide resolution cache
- An asyncio loading boundary with per-view placeholders
"""

# Version information
__version__ = "0.3.1"

__all__ = ["__version__"]

# Use specific imports like: from tenantviews.resolution import ViewResolver
