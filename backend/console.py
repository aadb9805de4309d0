"""Line-based console front end for the reply engine."""

import sys
from typing import Optional, TextIO

from response_bank import AdvisorEngine, advisor_engine

EXIT_WORDS = ("quit", "exit")
PROMPT = "you> "


def run_console(
    input_stream: Optional[TextIO] = None,
    output_stream: Optional[TextIO] = None,
    engine: Optional[AdvisorEngine] = None,
) -> int:
    """Read lines until quit/exit or EOF; returns the number of replies printed."""
    src = input_stream or sys.stdin
    out = output_stream or sys.stdout
    engine = engine or advisor_engine
    replies = 0
    print("Xenon Advisor console. Type 'quit' to leave.", file=out)
    while True:
        out.write(PROMPT)
        out.flush()
        line = src.readline()
        if not line:
            break
        if line.strip().lower() in EXIT_WORDS:
            break
        print(engine.respond(line), file=out)
        replies += 1
    print("Bye.", file=out)
    return replies
