"""A minimal line-editing kernel shell with a couple of built-in commands."""

from __future__ import annotations

from pinguin.fmt import bounded_equal
from pinguin.keyboard import Keycode
from pinguin.klog import Console

BUFFER_SIZE = 512
PROMPT = "> "
_BLANK = " \0\n"

_NEOFETCH_LINES = (
    "                  ==++==+",
    "               =+**%@%+*=+@#+",
    "               ***@-%.:@@-@=",
    "               @@@@ *@@+@#+",
    "                @@@%+=+*+=-#",
    "                :--::-:::=:#..",
    "                %--+*::+=::%+#.. %%@+=",
    "      ##%    +=+*%:--==-::#.*+%@.  ##++",
    "     %###=+@@:%:+=:::::..*-:.-.%%    ##+.",
    "     %##@@:%#%##.....+:::...:@@     %#*",
    "     .%%%%#%*=@-==++-**#::--....:%        .",
    "         @%%* =-----.*=.*.:.....::%",
    "         =-   ---:::::--::......::%",
    "         +    :--::::::::....:::::%",
    "              @--:::::::::::::::::%",
    "               --::::::::::::::::::",
    "               *-----------------=",
    "                --=============--",
    "                .+*************+.",
    "                  #%%%    ..%%%-",
    "                 .**#.     .-**.",
    "                  .. .     .. .",
    "You're using pinguing OS!?",
)
NEOFETCH = "".join(f"{line}\n" for line in _NEOFETCH_LINES)


class KernelShell:
    """Collects typed characters into a command line and runs it on newline."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.buffer: list[str] = []

    @property
    def command(self) -> str:
        """The characters typed since the last prompt."""
        return "".join(self.buffer)

    def reset(self) -> None:
        """Print the prompt and start a fresh command line."""
        self.console.print("%s", PROMPT)
        self.buffer.clear()

    def process_char(self, keycode: Keycode) -> None:
        """Echo one key press and edit the command line accordingly."""
        char = keycode.pressed_char
        if char == "\n":
            self.console.print("%c", char)
            self.run_command()
        elif char == "\b":
            if self.buffer:
                self.console.print("%c", char)
                self.buffer.pop()
        elif len(self.buffer) < BUFFER_SIZE - 1:
            self.buffer.append(char)
            self.console.print("%c", char)

    def run_command(self) -> None:
        """Run the current command line and show a new prompt."""
        command = self.command.strip(_BLANK)
        if bounded_equal(command, "help", BUFFER_SIZE):
            self.console.put("Nothing can help you\n")
        elif bounded_equal(command, "neofetch", BUFFER_SIZE):
            self.console.put(NEOFETCH)
        elif command:
            self.console.put("Unknown command\n")
        self.reset()