"""
resource_export — Export database-backed admin resources to xlsx.

Entry points:
  ExportResourceAction  : builder-style export action (services.export.action)
  create_fastapi_app    : HTTP surface for hosts (main)
"""

__version__ = "2.0.0"
