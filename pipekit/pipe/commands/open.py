"""
Open command - Edit a text file in place.

Used by the :open directive, which collects the option lines
following it. Supported options:
- -c, --create: create the file when it does not exist
- -r, --replace OLD NEW: replace every occurrence of OLD
- -x, --regex PATTERN REPL: regular expression substitution
- -a, --append TEXT: append a line
- -p, --prepend TEXT: prepend a line
- -d, --delete-lines PATTERN: drop lines matching a regular expression
- -s, --save-as PATH: write the result elsewhere
- -t, --self-closing [TAG...]: collapse empty XML elements such as
  <br></br> into <br/>, except the listed tags
"""

import os
import re

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap

# option -> (operation name, number of values); VARIADIC takes values up to the next option
VARIADIC = -1

OPTIONS = {
    "-c": ("create", 0),
    "--create": ("create", 0),
    "-r": ("replace", 2),
    "--replace": ("replace", 2),
    "-x": ("regex", 2),
    "--regex": ("regex", 2),
    "-a": ("append", 1),
    "--append": ("append", 1),
    "-p": ("prepend", 1),
    "--prepend": ("prepend", 1),
    "-d": ("delete-lines", 1),
    "--delete-lines": ("delete-lines", 1),
    "-s": ("save-as", 1),
    "--save-as": ("save-as", 1),
    "-t": ("self-closing", VARIADIC),
    "--self-closing": ("self-closing", VARIADIC),
}

EMPTY_ELEMENT_PATTERN = re.compile(r"<([A-Za-z_][\w:.-]*)(\s[^<>]*)?></\1>")


def self_closing_tags(content: str, ignore_tags: list[str] | tuple[str, ...] = ()) -> str:
    """
    Rewrite empty XML elements as self-closing tags.

    Example:
        >>> self_closing_tags("<i></i><br></br>", ["i"])
        '<i></i><br/>'
    """
    ignored = set(ignore_tags)

    def collapse(match: re.Match) -> str:
        name, attributes = match.group(1), match.group(2) or ""
        if name in ignored:
            return match.group(0)
        return f"<{name}{attributes}/>"

    return EMPTY_ELEMENT_PATTERN.sub(collapse, content)


@PipeMap.register
class OpenCommand(PipeCommand):
    """
    Open a text file, apply edits and save it.

    Usage:
        open config.xml -r "debug=true" "debug=false"
        :open package.json
            -r "1.0.0" "$version"
            -a ""
    """

    keywords = ["open", "edit"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        path = self.parse_path(args[0])
        operations: list[tuple[str, list[str]]] = []
        create = False
        target = path

        i = 1
        while i < len(args):
            option = OPTIONS.get(args[i])
            if option is None:
                self.log.error(f"Unknown open option: {args[i]}")
                return self.codes.INVALID_ARGUMENTS

            name, count = option
            if count == VARIADIC:
                end = i + 1
                while end < len(args) and not args[end].startswith("-"):
                    end += 1
                count = end - i - 1
            values = args[i + 1:i + 1 + count]
            if len(values) < count:
                self.log.error(f"Option {args[i]} expects {count} value(s)")
                return self.codes.INVALID_ARGUMENTS

            if name == "create":
                create = True
            elif name == "save-as":
                target = self.parse_path(values[0])
            else:
                operations.append((name, values))
            i += 1 + count

        if os.path.isdir(path):
            self.log.error(f"Cannot open a directory: {path}")
            return self.codes.INVALID_ARGUMENTS

        if os.path.isfile(path):
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        elif create:
            content = ""
        else:
            self.log.error(f"File not found: {path}")
            return self.codes.INVALID_ARGUMENTS

        self.log.info(f"Open {path} ({len(operations)} edit(s))")
        self.breakpoint()

        try:
            for name, values in operations:
                content = self._apply(content, name, values)
        except re.error as e:
            self.log.error(f"Invalid pattern: {e}")
            return self.codes.INVALID_ARGUMENTS

        directory = os.path.dirname(target)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)

        return self.codes.SUCCESS

    def _apply(self, content: str, name: str, values: list[str]) -> str:
        if name == "replace":
            return content.replace(values[0], values[1])

        if name == "regex":
            return re.sub(values[0], values[1], content, flags=re.MULTILINE)

        if name == "append":
            if content and not content.endswith("\n"):
                content += "\n"
            return content + values[0] + "\n"

        if name == "prepend":
            return values[0] + "\n" + content

        if name == "self-closing":
            return self_closing_tags(content, values)

        # delete-lines
        pattern = re.compile(values[0])
        lines = content.splitlines(keepends=True)
        return "".join(line for line in lines if not pattern.search(line))
