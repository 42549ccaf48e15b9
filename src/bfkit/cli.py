from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .api import CompileOptions, build_executable, compile_file, parse_file
from .asm import TARGETS, default_target
from .errors import BFError
from .nodes import dump_ast
from .repl import Repl
from .state import ExecutionContext

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bfkit',
        description="Tape language interpreter, REPL and x86-64 compiler.",
    )
    parser.add_argument("file", nargs='?', help="program to run or compile (omit for the REPL)")
    parser.add_argument("-c", "--compile", action="store_true", help="compile FILE to a native executable")
    parser.add_argument("-O", "--optimize", action="store_true", help="run the peephole optimizer before emitting")
    parser.add_argument("-S", "--emit-asm", action="store_true", help="write assembly instead of an executable")
    parser.add_argument("-o", "--output", help="output path (default: FILE without its extension)")
    parser.add_argument("--target", choices=sorted(TARGETS), default=default_target(),
                        help="assembly target (default: host)")
    parser.add_argument("--keep-temps", action="store_true", help="keep intermediate .asm/.o files")
    parser.add_argument("--cell-bits", type=int, default=8, help="cell width in bits when interpreting (default 8)")
    parser.add_argument("--dump", type=int, metavar="N", help="print the first N cells after interpreting")
    parser.add_argument("--print-ast", action="store_true", help="print the parsed program and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="print status messages")
    parser.add_argument("--debug", action="store_true", help="print debug messages")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.verbose:
        logging.getLogger().setLevel(logging.INFO)


def _run_repl(args: argparse.Namespace) -> int:
    repl = Repl(cell_bits=args.cell_bits)
    try:
        error = repl.start()
    except KeyboardInterrupt:
        repl.stop()
        sys.stdout.write("\n")
        return 130
    return 1 if error is not None else 0


def _interpret(args: argparse.Namespace) -> int:
    program = parse_file(args.file)
    if args.print_ast:
        print(dump_ast(program))
        return 0
    context = program.run(ExecutionContext(cell_bits=args.cell_bits))
    if args.dump:
        sys.stdout.write("\n================\n")
        cells = context.dump(args.dump)
        for i in range(0, len(cells), 8):
            print(" ".join(str(c) for c in cells[i:i + 8]))
    return 0


def _compile(args: argparse.Namespace) -> int:
    options = CompileOptions(optimize=args.optimize, target=args.target)
    src = Path(args.file)
    if args.emit_asm:
        result = compile_file(src, options=options)
        out = Path(args.output) if args.output else src.with_suffix('.asm')
        out.write_text(result.asm)
        log.info("wrote %s (%d ops)", out, len(result.bytecode))
        return 0
    out = Path(args.output) if args.output else src.with_suffix('')
    if out == src:
        out = src.with_name(src.name + '.out')
    build_executable(src.read_bytes(), out, options=options, keep_temps=args.keep_temps)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    if args.file is None:
        if args.compile or args.emit_asm:
            parser.error("--compile/--emit-asm need a FILE")
        return _run_repl(args)

    try:
        if args.compile or args.emit_asm:
            return _compile(args)
        return _interpret(args)
    except FileNotFoundError:
        print(f"Couldn't find file: {args.file}", file=sys.stderr)
        return 1
    except BFError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
