"""create-nrtgmp-app -- scaffold a new NRTGMP project from the starter template.

Quick usage::

    from create_nrtgmp import Config, Scaffolder

    scaffolder = Scaffolder(Config.from_env())
    outcome = await scaffolder.run("my-app")
"""

__version__ = "1.0.0"

from create_nrtgmp.config import Config  # noqa: E402
from create_nrtgmp.orchestrator import Scaffolder, main  # noqa: E402

__all__ = [
    "Config",
    "Scaffolder",
    "__version__",
    "main",
]
