import os

VERSION = (0, 3, 1)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"

ARGV0 = "switchkit"
DESCRIPTION = "A task runner with a small, strict command-line switch grammar"
GLOBAL_SK_DIR = os.path.join(os.path.expanduser("~"), ".switchkit")
GLOBAL_LOG_FILE: str = os.path.join(GLOBAL_SK_DIR, "switchkit.log")

PLUGIN_GROUP = "switchkit.tasks"
EXTRA_ARGS_ENV = "SWITCHKIT_EXTRA_ARGS"
SAFEMODE_ENV = "SWITCHKIT_SAFEMODE"
