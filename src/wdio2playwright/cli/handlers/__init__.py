from .analyze import handle_analyze
from .commands import handle_compare, handle_register
from .migrate import handle_migrate, _migrate_single_file, _print_batch_summary
from .pom import handle_pom
from .state import handle_state

__all__ = [
  "_migrate_single_file",
  "_print_batch_summary",
  "handle_analyze",
  "handle_compare",
  "handle_migrate",
  "handle_pom",
  "handle_register",
  "handle_state",
]
