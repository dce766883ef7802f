import logging

from importlib import metadata
from switchkit import const, vt100
from switchkit.cli import TaskTable

_logger = logging.getLogger(__name__)


def load(table: TaskTable, ref: str | metadata.EntryPoint):
    """
    Loads one plugin and lets it register its tasks.

    Args:
        table: The table the plugin registers into.
        ref: An installed entry point, or a "module:attr" reference to a
            callable taking the table.
    """
    if isinstance(ref, str):
        ref = metadata.EntryPoint(name=ref, value=ref, group=const.PLUGIN_GROUP)

    _logger.info(f"Loading plugin {ref.value}")
    try:
        register = ref.load()
        register(table)
    except Exception as e:
        _logger.error(f"Failed to load plugin {ref.value}: {e}")
        vt100.warning(f"Plugin {ref.value} loading skipped due to: {e}")


def loadAll(table: TaskTable):
    _logger.info("Loading plugins...")
    for ep in metadata.entry_points(group=const.PLUGIN_GROUP):
        load(table, ep)
