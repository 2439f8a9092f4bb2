"""nitterboot - bootstrap a self-hosted Nitter instance.

Fetches and patches the compose descriptor and service config, materializes
the Nitter repository, generates session credentials and verifies the
resulting setup.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
