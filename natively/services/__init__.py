"""Services Package"""

from natively.services.initializer import (
    EnvironmentInitializer,
    initialize,
    render_exports,
    render_summary,
)
from natively.services.overrides import (
    from_environment,
    load_env_file,
    merge,
    parse_assignments,
)

__all__ = [
    "EnvironmentInitializer",
    "initialize",
    "render_exports",
    "render_summary",
    "from_environment",
    "load_env_file",
    "merge",
    "parse_assignments",
]
