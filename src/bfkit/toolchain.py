from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from .asm import ENTRY, get_target
from .errors import ToolchainError

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _run(cmd: List[str]) -> subprocess.CompletedProcess:
    log.info("running: %s", ' '.join(cmd))
    try:
        result = subprocess.run(cmd, text=True, capture_output=True)
    except FileNotFoundError as e:
        raise ToolchainError(message=f"{cmd[0]}: command not found", command=tuple(cmd)) from e
    if result.returncode != 0:
        raise ToolchainError(
            message=f"{cmd[0]} failed with exit status {result.returncode}\n{result.stderr.strip()}",
            command=tuple(cmd),
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


def assemble(asm_path: PathLike, obj_path: PathLike, target: Optional[str] = None,
             assembler: str = 'nasm') -> None:
    fmt = get_target(target).object_format
    _run([assembler, '-f', fmt, '-o', str(obj_path), str(asm_path)])


def link(obj_path: PathLike, exe_path: PathLike, target: Optional[str] = None,
         linker: str = 'ld') -> None:
    cmd = [linker, '-e', ENTRY]
    if get_target(target).name == 'macos':
        cmd += ['-static']
    cmd += ['-o', str(exe_path), str(obj_path)]
    _run(cmd)


def build_executable(asm_text: str, output: PathLike, target: Optional[str] = None,
                     *, keep_temps: bool = False) -> Path:
    """Assemble and link ``asm_text`` into ``output``. Intermediates live in a temp dir."""
    output = Path(output)
    workdir = tempfile.mkdtemp(prefix='bfkit-')
    try:
        asm_path = os.path.join(workdir, output.stem + '.asm')
        obj_path = os.path.join(workdir, output.stem + '.o')
        with open(asm_path, 'w') as f:
            f.write(asm_text)
        assemble(asm_path, obj_path, target)
        link(obj_path, output, target)
    finally:
        if keep_temps:
            log.warning("keeping intermediate files in %s", workdir)
        else:
            shutil.rmtree(workdir, ignore_errors=True)
    return output
