"""Main CLI application using cmd module."""

import cmd
import logging
import readline
import os

from ruuvi_decoders.config import load_config

from .ui import (
    draw_header,
    enter_fullscreen,
    exit_fullscreen,
    separator_line,
)
from .commands.decode import do_formats, handle_decode, handle_extract
from .commands.status import do_status


# History file for readline
HISTORY_FILE = os.path.expanduser("~/.ruuvi_decoders_history")


class RuuviCLI(cmd.Cmd):
    """Interactive CLI for decoding Ruuvi advertisements."""

    intro = ""
    prompt = "> "
    use_rawinput = True
    interactive = True  # Set to False for single command execution

    def preloop(self):
        """Set up the CLI before starting."""
        if not self.interactive:
            return

        # Load command history
        if os.path.exists(HISTORY_FILE):
            readline.read_history_file(HISTORY_FILE)

        # Enter fullscreen mode
        enter_fullscreen()
        draw_header()

    def postloop(self):
        """Clean up after exiting."""
        if not self.interactive:
            return

        # Save command history
        readline.write_history_file(HISTORY_FILE)
        exit_fullscreen()

    def precmd(self, line: str) -> str:
        """Pre-process command line."""
        if self.interactive:
            print(separator_line())
        # Strip leading slash if present (for /command style)
        if line.startswith("/"):
            line = line[1:]
        # Convert hyphens to underscores for command names
        parts = line.split(None, 1)
        if parts:
            parts[0] = parts[0].replace("-", "_")
            line = " ".join(parts)
        return line

    def postcmd(self, stop: bool, line: str) -> bool:
        """Post-process after command execution."""
        if self.interactive:
            print(separator_line())
        return stop

    def emptyline(self):
        """Do nothing on empty input."""
        pass

    def default(self, line: str):
        """Handle unknown commands."""
        print(f"Unknown command: {line}")
        print("Type 'help' for available commands.")

    # --- Commands ---

    def do_decode(self, arg: str):
        """Decode advertisement or payload hex. Usage: decode [json] <hex>"""
        handle_decode(arg)

    def do_extract(self, arg: str):
        """Show AD structures and the Ruuvi payload. Usage: extract <hex>"""
        handle_extract(arg)

    def do_formats(self, arg: str):
        """List known data formats."""
        do_formats(arg)

    def do_status(self, arg: str):
        """Show configuration status."""
        do_status(arg)

    def do_exit(self, arg: str):
        """Exit the CLI."""
        return True

    def do_quit(self, arg: str):
        """Exit the CLI."""
        return True

    def do_EOF(self, arg: str):
        """Handle Ctrl+D."""
        print()
        return True

    def do_help(self, arg: str):
        """Show available commands."""
        if arg:
            # Show help for specific command
            super().do_help(arg)
        else:
            print("""Available commands:

  decode <hex>           Decode an advertisement or bare payload
  decode json <hex>      Decode and print as JSON
  extract <hex>          Show AD structures and the Ruuvi payload
  formats                List known data formats
  status                 Show configuration status
  help [command]         Show help
  exit                   Exit the CLI
""")


def main():
    """Run the interactive CLI or execute a single command."""
    import sys

    config = load_config()
    logging.basicConfig(level=config.logging.level)

    if len(sys.argv) > 1:
        # Execute command directly without interactive mode
        command = " ".join(sys.argv[1:])
        cli = RuuviCLI()
        cli.interactive = False
        cli.onecmd(cli.precmd(command))
    else:
        # Interactive mode
        try:
            RuuviCLI().cmdloop()
        except KeyboardInterrupt:
            exit_fullscreen()
            print()
