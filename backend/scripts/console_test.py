"""Console front end driven through in-memory streams."""

import io

from categories import CategoryHint
from console import PROMPT, run_console
from response_bank import GENERIC_OPENERS, AdvisorEngine
from settings import ServerSettings

from test_utils import pool_for


def _run(text: str):
    out = io.StringIO()
    engine = AdvisorEngine(settings=ServerSettings(selector_seed=99))
    count = run_console(io.StringIO(text), out, engine)
    return count, out.getvalue()


def test_quit_stops_reading():
    count, output = _run("winning big\nQUIT\nthis line is never read\n")
    assert count == 1
    lines = output.splitlines()
    assert lines[0].startswith("Xenon Advisor console")
    assert lines[-1].endswith("Bye.")
    reply = lines[1][len(PROMPT):]
    assert reply in pool_for(CategoryHint.WINNING)


def test_exit_word_is_trimmed_and_case_insensitive():
    count, _ = _run("  Exit  \n")
    assert count == 0


def test_eof_ends_session():
    count, output = _run("fake news on tv\nhow much money")
    assert count == 2
    assert output.count(PROMPT) == 3
    assert output.rstrip().endswith("Bye.")


def test_blank_line_gets_an_opener():
    count, output = _run("\n")
    assert count == 1
    reply = output.splitlines()[1][len(PROMPT):]
    assert reply in GENERIC_OPENERS
