"""sfds-status - status probe for a dedicated game server management API.

Provides:
* HTTPS transport for the JSON management endpoint (`/api/v1`)
* Password login and the three read-only status queries
* Flattening of the responses into one ordered status record
* Console, JSON and CSV rendering
* Thin CLI wrapper (`sfds-status`) whose exit code reports player presence

The CLI remains the primary user interface; the helpers exported here can be
used programmatically as well.
"""

from ._version import __version__
from .common.config import OutputFormat, ServerConfig  # noqa: F401
from .common.logging_config import configure_logging  # noqa: F401
from .core.flatten import flatten, game_phase_label  # noqa: F401
from .core.probe import ProbeResult, run_probe  # noqa: F401
from .core.render import render  # noqa: F401

__all__ = [
	"__version__",
	"configure_logging",
	"OutputFormat",
	"ServerConfig",
	"flatten",
	"game_phase_label",
	"ProbeResult",
	"run_probe",
	"render",
]
