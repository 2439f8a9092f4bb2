"""Session credential provisioning."""

from __future__ import annotations

from nitterboot.session.provisioner import SessionProvisioner
from nitterboot.session.scope import ScopedDirectory

__all__ = ["ScopedDirectory", "SessionProvisioner"]
