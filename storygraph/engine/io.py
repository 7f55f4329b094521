import sys
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, TextIO


class LineSource(ABC):
    """
    Supplies one line of user input per prompt.

    Implementations may read from a console, a script, a socket, etc.
    The engine never cares which.
    """

    @abstractmethod
    def read_line(self, prompt: str) -> Optional[str]:
        """
        Return the next line without its trailing newline,
        or None once the stream is exhausted or unreadable.
        """
        raise NotImplementedError


class TextSink(ABC):
    """Append-only receiver of emitted text lines."""

    @abstractmethod
    def write_line(self, text: str) -> None:
        raise NotImplementedError


# ------------------------------------------------------------------
# Console
# ------------------------------------------------------------------

class ConsoleSource(LineSource):

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None


class ConsoleSink(TextSink):

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def write_line(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout)


# ------------------------------------------------------------------
# In-memory
# ------------------------------------------------------------------

class ScriptedSource(LineSource):
    """
    Feeds a fixed list of lines, then reports end of stream.

    With ``echo``, each prompt and the line answering it are written to
    that sink as one line, the way they appear on a console.
    """

    def __init__(self, lines: Iterable[str], echo: Optional[TextSink] = None) -> None:
        self._lines = iter(list(lines))
        self.prompts: List[str] = []
        self.echo = echo

    def read_line(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        line = next(self._lines, None)
        if self.echo is not None:
            self.echo.write_line(prompt + (line if line is not None else ""))
        return line


class BufferSink(TextSink):
    """Collects emitted lines in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def drain(self) -> List[str]:
        """Return and forget everything collected so far."""
        lines, self.lines = self.lines, []
        return lines

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
