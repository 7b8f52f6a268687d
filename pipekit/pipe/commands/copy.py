"""
Copy command - Copy files and directory trees.
"""

import os
import shutil

from pipekit.codes import ResultCode
from pipekit.pipe.commands.base import PipeCommand
from pipekit.pipe.pipe_map import PipeMap


@PipeMap.register
class CopyCommand(PipeCommand):
    """
    Copy a file or a directory.

    Directories are merged into an existing destination.

    Usage:
        copy src/ dist/
        copy src/ dist/ -i node_modules -i .git
        copy readme.md dist/ --quiet
    """

    keywords = ["copy", "cp"]

    def run(self, args: list[str]) -> ResultCode:
        if not args:
            return self.codes.MISSING_ARGUMENTS

        if len(args) < 2:
            return self.codes.INVALID_ARGUMENTS

        source = self.parse_path(args[0])
        destination = self.parse_path(args[1])
        ignores: list[str] = []
        quiet = False

        i = 2
        while i < len(args):
            arg = args[i]
            if arg in ("-i", "--ignore") and i + 1 < len(args):
                i += 1
                ignores.append(args[i])
            elif arg in ("-q", "--quiet"):
                quiet = True
            else:
                return self.codes.INVALID_ARGUMENTS
            i += 1

        if not os.path.exists(source):
            self.log.error(f"Source not found: {source}")
            return self.codes.INVALID_ARGUMENTS

        self.log.debug(f'Copy "{source}" to "{destination}"')
        self.breakpoint()

        def copy_file(src: str, dest: str) -> str:
            if not quiet:
                self.log.info(f"{src} => {dest}")
            return shutil.copy2(src, dest)

        if os.path.isdir(source):
            shutil.copytree(
                source,
                destination,
                ignore=self._ignore(ignores),
                copy_function=copy_file,
                dirs_exist_ok=True,
            )
        else:
            if os.path.isdir(destination):
                destination = os.path.join(destination, os.path.basename(source))
            directory = os.path.dirname(destination)
            if directory:
                os.makedirs(directory, exist_ok=True)
            copy_file(source, destination)

        return self.codes.SUCCESS

    @staticmethod
    def _ignore(ignores: list[str]):
        """Build a copytree ignore callback matching names or path suffixes."""

        def ignore(directory: str, names: list[str]) -> list[str]:
            ignored = []
            for name in names:
                full = os.path.join(directory, name).replace("\\", "/")
                for pattern in ignores:
                    pattern = pattern.replace("\\", "/")
                    if name == pattern or full.endswith(f"/{pattern}"):
                        ignored.append(name)
                        break
            return ignored

        return ignore
