import logging
import dataclasses as dt

from typing import Any, Callable, Iterable, Optional
from switchkit import const, vt100
from switchkit.errors import ParseError
from switchkit.option import Option
from switchkit.parser import Parser, ParseResult

_logger = logging.getLogger(__name__)

Handler = Callable[[ParseResult], Any]


@dt.dataclass
class Task:
    """
    Represents a task that can be invoked from the command line.
    """

    name: str
    handler: Handler
    description: str = ""
    usage: Optional[str] = None
    options: list[Option] = dt.field(default_factory=list)

    parser: Parser = dt.field(init=False, repr=False)

    def __post_init__(self):
        self.parser = Parser(self.options)

    def formattedUsage(self) -> str:
        """Returns the task usage followed by its switches."""
        res = self.usage or self.name
        switches = self.parser.usage()
        return f"{res} {switches}" if switches else res


class TaskTable:
    """
    The tasks known to the process, keyed by name.

    A table is created at startup and passed explicitly to plugins and to the
    dispatcher.
    """

    tasks: dict[str, Task]
    aliases: dict[str, str]

    def __init__(self):
        self.tasks = {}
        self.aliases = {}

    def register(self, task: Task) -> Task:
        _logger.info(f"Registering task '{task.name}'")
        if task.name in self.tasks:
            raise ValueError(f"Task '{task.name}' is already defined")
        self.tasks[task.name] = task
        return task

    def task(
        self,
        name: str,
        description: str = "",
        usage: Optional[str] = None,
        options: Iterable[Option] = (),
    ) -> Callable[[Handler], Handler]:
        """
        Decorator for registering a task handler.

        Args:
            name: The name the task is invoked with.
            description: A description of the task, first line used in listings.
            usage: The usage shown in help, defaults to the task name.
            options: The switches the task accepts.
        """

        def wrap(fn: Handler) -> Handler:
            self.register(Task(name, fn, description, usage, list(options)))
            return fn

        return wrap

    def map(self, alias: str, name: str) -> None:
        """Makes `alias` invoke the task called `name`."""
        self.aliases[alias] = name

    def lookup(self, name: str) -> Task:
        name = self.aliases.get(name, name)
        if name not in self.tasks:
            raise RuntimeError(f"Unknown task '{name}'")
        return self.tasks[name]

    def help(self, name: Optional[str] = None):
        """Prints the task listing, or the details of one task."""
        if name is None:
            vt100.subtitle("Tasks")
            usages = {n: t.formattedUsage() for n, t in sorted(self.tasks.items())}
            width = max((len(u) for u in usages.values()), default=0)
            for n, u in usages.items():
                description = self.tasks[n].description.split("\n")[0]
                print(vt100.indent(f"{u:<{width}}  {description}"))
            print()
            return

        task = self.lookup(name)
        vt100.title(task.name)
        print()

        vt100.subtitle("Usage")
        print(vt100.indent(f"{const.ARGV0} {task.formattedUsage()}"))
        print()

        if task.description:
            vt100.subtitle("Description")
            print(vt100.indent(task.description))
            print()

        if task.options:
            vt100.subtitle("Options")
            for opt in task.options:
                flags = ", ".join(list(opt.aliases) + [opt.name])
                print(vt100.indent(f"{flags} {opt.description}".rstrip()))
            print()

    def invoke(self, argv: list[str]) -> int:
        """
        Runs the task named by the first argument with the remaining ones.

        Returns:
            The exit status: 0 on success, 1 on an unknown task or a parse error.
        """
        if not argv:
            self.help()
            return 0

        name, *args = argv
        try:
            task = self.lookup(name)
        except RuntimeError as e:
            vt100.error(str(e))
            return 1

        try:
            result = task.parser.parse(args)
        except ParseError as e:
            _logger.info(f"Parsing arguments of '{task.name}' failed: {e}")
            vt100.error(str(e))
            print(f"Usage: {const.ARGV0} {task.formattedUsage()}", end="\n\n")
            return 1

        task.handler(result)
        return 0
