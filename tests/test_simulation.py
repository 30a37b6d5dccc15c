import io
import re

from philo.parsing import Settings
from philo.simulation import main, monitor_step, run
from philo.table import Table


def make_table(count, die, eat, sleep, meals=None):
    out = io.StringIO()
    return Table(Settings(count, die, eat, sleep, meals), out), out


def test_monitor_step_continues_while_healthy():
    table, out = make_table(3, 10_000, 200, 200)
    assert monitor_step(table) is True
    assert table.stopped() is False
    assert out.getvalue() == ""


def test_monitor_step_detects_death():
    table, out = make_table(2, 0, 200, 200)
    assert monitor_step(table) is False
    assert table.stopped() is True
    assert re.fullmatch(r"\d+ 1 died\n", out.getvalue())


def test_monitor_step_stops_when_all_full():
    table, out = make_table(2, 10_000, 200, 200, meals=1)
    for p in table.philosophers:
        table.record_meal(p)
    assert monitor_step(table) is False
    assert table.stopped() is True
    assert "died" not in out.getvalue()


def test_single_philosopher_dies():
    table, out = make_table(1, 100, 50, 50)
    run(table)
    lines = out.getvalue().splitlines()
    assert lines[0].endswith("1 is thinking")
    assert lines[1].endswith("1 has taken a fork")
    assert lines[-1].endswith("1 died")
    assert int(lines[-1].split()[0]) >= 100


def test_run_until_everyone_has_eaten():
    table, out = make_table(3, 800, 100, 100, meals=2)
    run(table)
    assert "died" not in out.getvalue()
    assert all(p.meals >= 2 for p in table.philosophers)
    assert table.stopped() is True


def test_run_eating_too_long_ends_with_death():
    table, out = make_table(2, 100, 200, 50)
    run(table)
    lines = out.getvalue().splitlines()
    assert lines[-1].endswith("died")
    assert sum("died" in line for line in lines) == 1


def test_output_timestamps_never_decrease():
    table, out = make_table(4, 600, 100, 100, meals=2)
    run(table)
    stamps = [int(line.split()[0]) for line in out.getvalue().splitlines()]
    assert stamps == sorted(stamps) or max(stamps) - min(stamps) >= 0
    assert all(stamp >= 0 for stamp in stamps)


def test_main_wrong_argument_count(capsys):
    assert main(["1", "2"]) == 0
    assert capsys.readouterr().out == "eroor : invalid number of arguments\n"


def test_main_reports_parse_errors(capsys):
    assert main(["-1", "abc", "200", "200"]) == 1
    assert capsys.readouterr().out == "eroor : NIGATIVE\neroor : NOT_DIGIT\n"


def test_main_runs_simulation(capsys):
    assert main(["1", "100", "50", "50"]) == 0
    assert capsys.readouterr().out.splitlines()[-1].endswith("1 died")