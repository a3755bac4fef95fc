# main.py
"""
Command-line front end: interactive REPL, batch mode and one-shot evaluation.

The REPL reads a line, compiles and evaluates it, and prints either the
integer result or an error message. A bad line never ends the session; only
end of input (Ctrl-D) or ``:exit`` does.

    uncalc "2 + 3 * 4"          # one-shot, prints 14
    echo "(2+3)*4" | uncalc     # batch, one expression per line
    uncalc                      # interactive session
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from pydantic import ValidationError

from uncalc.errors import EvalError, ParseError
from uncalc.evaluator import Evaluator
from uncalc.parser import compile_expression
from uncalc.program import PostfixProgram
from uncalc.settings import Settings, configure_logging, load_settings

logger = logging.getLogger(__name__)

# --------------------------
# Help
# --------------------------

_HELP_TOPICS = {
    'general': (
        "UnCalc integer calculator help\n"
        "Type an expression and press Enter, e.g.:\n"
        "  2 + 3 * 4     -> 14\n"
        "  (2 + 3) * 4   -> 20\n"
        "  5 * -3        -> -15\n"
        "  --5           -> 5\n"
        "  2 ^ 10        -> 1024\n"
        "Commands:\n"
        "  :help, help [topic]    show help (topics: operators, errors)\n"
        "  :postfix <expr>        show the compiled postfix form\n"
        "  :debug on|off          print the postfix form with every result\n"
        "  :history               show recent history\n"
        "  :exit                  exit\n"
    ),
    'operators': (
        "Operators and precedence (high -> low):\n"
        "  -        unary minus (printed as '#' in postfix form)\n"
        "  ^        integer power, left-assoc; negative exponents give 0\n"
        "  * / %    division and remainder truncate toward zero\n"
        "  + -\n"
        "Operands are whole numbers up to 99999999. Results must fit in a\n"
        "32-bit signed integer.\n"
    ),
    'errors': (
        "Syntax errors are reported before anything is evaluated:\n"
        "  2 3      Missing operator\n"
        "  2 +      Missing operand\n"
        "  (2 + 3   Missing ')'\n"
        "  2 + 3)   Missing '('\n"
        "  2 $ 3    Unknown operator\n"
        "Arithmetic errors are reported while evaluating:\n"
        "  1 / 0    Division by zero\n"
        "  1 % 0    Modulo by zero\n"
    ),
}


def show_help(topic: Optional[str] = None) -> str:
    """Return help text for topic or general if None."""
    if not topic:
        return _HELP_TOPICS['general']
    key = topic.lower()
    return _HELP_TOPICS.get(key, f"No help available for topic '{topic}'")


def run_expression(text: str, evaluator: Optional[Evaluator] = None) -> Tuple[bool, str, Optional[PostfixProgram]]:
    """Like ``calculate`` but also returns the compiled program (None when
    compilation failed)."""
    evaluator = evaluator or Evaluator()
    try:
        program = compile_expression(text)
    except ParseError as e:
        return False, f"Syntax error: {e}", None
    try:
        return True, str(evaluator.eval(program)), program
    except EvalError as e:
        return False, f"Error: {e}", program


def calculate(text: str, evaluator: Optional[Evaluator] = None) -> Tuple[bool, str]:
    """Compile and evaluate ``text``. Returns (ok, output) and never raises
    for malformed input or arithmetic failures."""
    ok, out, _ = run_expression(text, evaluator)
    return ok, out


# --------------------------
# REPL
# --------------------------

class REPL:
    """Read-Eval-Print Loop for the calculator."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self.evaluator = Evaluator()
        self.history_file = self.settings.history_file
        self.show_postfix = self.settings.show_postfix
        self.session: Optional[PromptSession] = None

    def _process_command(self, line: str) -> Optional[str]:
        """Handle ':' commands and 'help'. Returns the response, or None if
        the line is an expression."""
        s = line.strip()
        if not s:
            return None
        if s.startswith(':'):
            body = s[1:].lstrip()
            if body == '':
                return "No command specified. Use :help for available commands."
            parts = body.split(None, 1)
            cmd = parts[0]
            arg = parts[1].strip() if len(parts) > 1 else ''
            return self._run_command(cmd, arg)
        if s.lower() == 'help' or s.lower().startswith('help '):
            parts = s.split(None, 1)
            return show_help(parts[1].strip() if len(parts) > 1 else None)
        return None

    def _run_command(self, cmd: str, arg: str = '') -> str:
        """Execute a colon command. Raises EOFError for exit/quit."""
        cmd_lower = cmd.lower()
        if cmd_lower in {'exit', 'quit'}:
            raise EOFError()
        if cmd_lower == 'help':
            return show_help(arg or None)
        if cmd_lower == 'postfix':
            if not arg:
                return "Usage: :postfix <expression>"
            try:
                return str(compile_expression(arg))
            except ParseError as e:
                return f"Syntax error: {e}"
        if cmd_lower == 'debug':
            if arg.lower() in {'on', 'off'}:
                self.show_postfix = arg.lower() == 'on'
            elif arg:
                return "Usage: :debug on|off"
            return f"Debug output is {'on' if self.show_postfix else 'off'}"
        if cmd_lower == 'history':
            try:
                with open(self.history_file, 'r', encoding='utf-8') as f:
                    entries = [ln[1:] for ln in f.read().splitlines() if ln.startswith('+')]
            except OSError as e:
                logger.warning(f"Could not read history file {self.history_file}: {e}")
                return f"Could not read history: {e}"
            if not entries:
                return "(no history)"
            return "\n".join(entries[-self.settings.history_lines:])
        return f"Unknown command: {cmd}"

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out

        text = line.strip()
        ok, out, program = run_expression(text, self.evaluator)
        if ok and self.show_postfix:
            out = f"postfix: {program}\n{out}"
        return ok, out

    def repl_loop(self) -> None:
        """Interactive loop with persistent history via prompt_toolkit."""
        print("UnCalc integer calculator. Type :help for help. Ctrl-D or :exit to quit.")
        if self.session is None:
            self.session = PromptSession(history=FileHistory(self.history_file))
        while True:
            try:
                line = self.session.prompt(self.settings.prompt)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if not line.strip():
                continue
            try:
                ok, out = self.evaluate_line(line)
            except EOFError:
                print("Exiting.")
                break
            print(out)


def run_batch(lines: Iterable[str], out: TextIO, show_postfix: bool = False) -> int:
    """Evaluate one expression per line. Returns 1 if any line failed, else 0."""
    evaluator = Evaluator()
    status = 0
    for line in lines:
        text = line.strip()
        if not text:
            continue
        ok, result, program = run_expression(text, evaluator)
        if ok and show_postfix:
            print(f"postfix: {program}", file=out)
        print(result, file=out)
        if not ok:
            status = 1
    return status


# --------------------------
# Entry point
# --------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="uncalc", description="Evaluate integer arithmetic expressions.")
    parser.add_argument(
        "expressions",
        nargs="*",
        help="Expressions to evaluate (put -- before one that starts with '-'). Without any, read from stdin or start the REPL.",
    )
    parser.add_argument(
        "--postfix",
        action="store_true",
        default=None,
        help="Also print the compiled postfix form of each expression.",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        help="File used to persist REPL history (default: ~/.uncalc_history).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: WARNING).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = load_settings(
            history_file=args.history_file,
            log_level=args.log_level,
            show_postfix=args.postfix,
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    configure_logging(settings)

    if args.expressions:
        return run_batch(args.expressions, sys.stdout, settings.show_postfix)
    if not sys.stdin.isatty():
        return run_batch(sys.stdin, sys.stdout, settings.show_postfix)

    repl = REPL(settings)
    repl.repl_loop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
