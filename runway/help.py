"""
Help and version screens.

Both are printed to stdout with rich. The palette can be overridden by the host
program through a __styles__ mapping on __main__ (same keys as below), and the
program name through __prog__, as for fault rendering.
"""
from collections import defaultdict
from importlib.metadata import PackageNotFoundError, version as distribution_version

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

USAGE = (
    ("init", "[projectDir]"),
    ("build", "[projectDir]"),
    ("dev", "[projectDir]"),
    ("routes", "[projectDir]"),
    ("watch", "[projectDir]"),
)

# (heading, ((flag, description), ...))
OPTIONS = (
    (None, (
        ("--help, -h", "Print this help message and exit"),
        ("--version, -v", "Print the CLI version and exit"),
    )),
    ("`build` Options", (
        ("--sourcemap", "Generate source maps for production"),
    )),
    ("`dev` Options", (
        ("--command, -c", "Command used to run your app server"),
        ("--manual", "Enable manual mode"),
        ("--port, -p", "Port for the dev server. Default: any open port"),
        ("--tls-key", "Path to TLS key (key.pem)"),
        ("--tls-cert", "Path to TLS certificate (cert.pem)"),
    )),
    ("`init` Options", (
        ("--no-delete", "Skip deleting the `runway.init` script"),
    )),
    ("`routes` Options", (
        ("--json", "Print the routes as JSON"),
    )),
    ("`vite:` Options", (
        ("--config, -c", "Use the specified config file"),
        ("--host [host]", "Specify hostname, or listen on all addresses when bare"),
        ("--open [path]", "Open the browser on startup"),
        ("--mode, -m", "Set env mode"),
        ("--logLevel, -l", "info | warn | error | silent"),
    )),
)

VALUES = (
    ("projectDir", "The project directory"),
)

# (heading, (line, ...)); lines starting with '#' are comments
EXAMPLES = (
    ("Initialize a project", (
        "$ {prog} init",
    )),
    ("Build your project", (
        "$ {prog} build",
        "$ {prog} build --sourcemap",
        "$ {prog} build my-app",
    )),
    ("Run your project locally in development", (
        "$ {prog} dev",
        '$ {prog} dev -c "node ./server.js"',
    )),
    ("Start your server separately and watch for changes", (
        "# custom server start command, for example:",
        "$ {prog} watch",
        "# in a separate tab:",
        "$ node --inspect ./build/server.js",
    )),
    ("Show all routes in your app", (
        "$ {prog} routes",
        "$ {prog} routes my-app",
        "$ {prog} routes --json",
    )),
    ("Reveal the used entry point", (
        "$ {prog} reveal entry.client",
        "$ {prog} reveal entry.server",
        "$ {prog} reveal entry.client --no-typescript",
        "$ {prog} reveal entry.server --no-typescript",
    )),
)


def _palette():
    return defaultdict(str, {
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "program-version": "bold #00E6FF",  # cyan version
        "heading": "bold #FFFFFF",
        "usage-section": "bold #36C5F0",
        "argument": "bold #FFD600",  # amber for parameters
        "flag-name": "bold #22C55E",
        "description": "#9CA3AF",
        "example": "#D1D5DB",
        "comment": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))


def program_name():
    return getattr(__import__("__main__"), "__prog__", "runway")


def package_version():
    """Installed distribution version, or the in-tree one when not installed."""
    try:
        return distribution_version("runway")
    except PackageNotFoundError:
        from . import __version__
        return __version__


def render_help():
    """Build the help screen as a rich renderable."""
    styles = _palette()
    prog = program_name()
    renders = []

    renders.append(Text.assemble((prog, styles["program-name"]), " — project tooling"))

    renders.append(Text("\nUsage:", styles["heading"]))
    for command, argument in USAGE:
        renders.append(Text.assemble(
            "  $ ", (prog, styles["usage-section"]), " ", (command, styles["usage-section"]),
            " ", (argument, styles["argument"])
        ))

    for heading, rows in OPTIONS:
        renders.append(Text("\n%s:" % (heading or "Options"), styles["heading"]))
        table = Table.grid(padding=(0, 4))
        table.add_column(style=styles["flag-name"], no_wrap=True)
        table.add_column(style=styles["description"])
        for flag, description in rows:
            table.add_row("  " + flag, description)
        renders.append(table)

    renders.append(Text("\nValues:", styles["heading"]))
    for name, description in VALUES:
        renders.append(Text.assemble("  - ", (name, styles["argument"]), "  ", (description, styles["description"])))

    for heading, lines in EXAMPLES:
        renders.append(Text("\n%s:" % heading, styles["heading"]))
        for line in lines:
            line = line.format(prog=prog)
            style = styles["comment"] if line.startswith("#") else styles["example"]
            renders.append(Text("    " + line, style))

    return Group(*renders)


def print_help(console=None):
    (console or Console()).print(render_help())


def print_version(console=None):
    (console or Console()).print(Text(package_version(), _palette()["program-version"]))


__all__ = (
    "render_help",
    "print_help",
    "print_version",
    "package_version",
    "program_name",
)
