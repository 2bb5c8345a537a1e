# plank_solver/test_logger.py
# Quiet/verbose switching of the shared logger and thread-safe line output.
#   pytest plank_solver/test_logger.py

from __future__ import annotations

import threading

from plank_solver.logger import Logger, get_logger, set_enabled


def test_info_and_warn_follow_enabled_flag(capsys) -> None:
    log = Logger(enabled=True)
    log.info("restart 1/3")
    log.warn("time limit reached")
    captured = capsys.readouterr()
    assert captured.out == "[PLANK] restart 1/3\n"
    assert captured.err == "[PLANK] WARNING: time limit reached\n"

    log.enabled = False
    log.info("hidden")
    log.warn("hidden")
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""


def test_errors_are_shown_when_quiet(capsys) -> None:
    Logger(enabled=False).error("bad plank")
    assert capsys.readouterr().err == "[PLANK] ERROR: bad plank\n"


def test_set_enabled_switches_the_shared_logger(capsys) -> None:
    log = get_logger()
    before = log.enabled
    try:
        set_enabled(True)
        log.info("on")
        set_enabled(False)
        log.info("off")
    finally:
        set_enabled(before)
    assert capsys.readouterr().out == "[PLANK] on\n"


def test_lines_from_threads_stay_whole(capsys) -> None:
    log = Logger(enabled=True, prefix="[T]")

    def work(k: int) -> None:
        for i in range(50):
            log.info(f"worker {k} line {i}")

    threads = [threading.Thread(target=work, args=(k,)) for k in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 200
    assert all(line.startswith("[T] worker ") for line in lines)
