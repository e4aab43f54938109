"""Post-processing steps run inside a freshly created project."""

from .git import init_repository
from .npm import audit_dependencies, install_dependencies

__all__ = ["init_repository", "install_dependencies", "audit_dependencies"]
