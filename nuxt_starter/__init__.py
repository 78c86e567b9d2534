"""nuxt-starter -- interactive scaffolder for Nuxt 3 projects.

Quick usage::

    from nuxt_starter import StarterConfig, StarterSession

    settings = StarterConfig(target_path=Path("/tmp/my-app"))
    outcome = asyncio.run(StarterSession(settings).run())
"""

from nuxt_starter.config import Manifest, ProjectConfig, StarterConfig
from nuxt_starter.session import Outcome, StarterSession

__version__ = "0.1.0"

__all__ = [
    "Manifest",
    "Outcome",
    "ProjectConfig",
    "StarterConfig",
    "StarterSession",
]
