"""
taskwright: named build tasks, shell/filesystem helpers and remote command dispatch.

A build script registers tasks on a Builder and hands it argv:

    from taskwright import Builder

    builder = Builder()

    @builder.task("clean", "Remove build output")
    def clean(args):
        builder.remove("build")
        return 0
"""

from .builder import Builder
from .core.errors import ErrorKind, FatalError
from .tasks.task_models import Option, Task

__all__ = ["Builder", "ErrorKind", "FatalError", "Option", "Task"]
