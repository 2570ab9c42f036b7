"""Tests for configuration loading and the command-line entry point."""
import asyncio
import logging
import os
import signal
import subprocess
import sys
import threading
import time
import pytest
from unittest.mock import Mock, patch
import main
from fetch_state import Error, Idle, Success
from fetch_state_machine import FetchStateMachine
from openweather_client import DEFAULT_BASE_URL, OpenWeatherClient
from weather_client import NotFoundError, WeatherClientBase
from weather_record import WeatherRecord


class StubClient(WeatherClientBase):
    def fetch(self, city_query, credential):
        if city_query == "Atlantis":
            raise NotFoundError("HTTP 404", status_code=404)
        return WeatherRecord(city_query, 20.0, 50, 1010, (), 2.0)


@pytest.fixture
def no_dotenv():
    with patch("main.load_dotenv"):
        yield


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.city == []
    assert args.timeout is None
    assert args.verbose is False


def test_parse_args_repeated_city():
    args = main.parse_args(["--city", "London", "--city", "Paris", "--timeout", "5"])
    assert args.city == ["London", "Paris"]
    assert args.timeout == 5.0


def test_load_config_from_environment(monkeypatch, no_dotenv):
    monkeypatch.setenv("WEATHER_API_KEY", "abc123")
    monkeypatch.setenv("WEATHER_BASE_URL", "http://localhost:9000/")

    api_key, base_url = main.load_config()

    assert api_key == "abc123"
    assert base_url == "http://localhost:9000/"


def test_load_config_logs_masked_key(monkeypatch, no_dotenv, caplog):
    monkeypatch.setenv("WEATHER_API_KEY", "abcdef123456")
    monkeypatch.delenv("WEATHER_BASE_URL", raising=False)

    with caplog.at_level(logging.INFO):
        main.load_config()

    assert f"Configuration loaded: api_key=abcd... base_url={DEFAULT_BASE_URL}" in caplog.text
    assert "abcdef123456" not in caplog.text


def test_load_config_missing_key_is_empty(monkeypatch, no_dotenv):
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)
    monkeypatch.delenv("WEATHER_BASE_URL", raising=False)

    api_key, base_url = main.load_config()

    assert api_key == ""
    assert base_url == DEFAULT_BASE_URL


def test_build_state_machine():
    args = main.parse_args(["--timeout", "3"])

    machine = main.build_state_machine("key", DEFAULT_BASE_URL, args)

    assert isinstance(machine.client, OpenWeatherClient)
    assert machine.client.timeout == 3.0


def test_run_once_success():
    machine = FetchStateMachine(StubClient(), "key")

    ok = asyncio.run(main.run_once(machine, ["London", "Paris"]))

    assert ok is True
    assert isinstance(machine.state, Success)
    assert machine.state.weather.location == "Paris"


def test_run_once_reports_failure():
    machine = FetchStateMachine(StubClient(), "key")

    ok = asyncio.run(main.run_once(machine, ["Atlantis", "London"]))

    assert ok is False
    assert isinstance(machine.state, Success)


def test_run_once_missing_key():
    machine = FetchStateMachine(StubClient(), "")

    ok = asyncio.run(main.run_once(machine, ["London"]))

    assert ok is False
    assert isinstance(machine.state, Error)


def test_main_one_shot_exit_code(monkeypatch, no_dotenv):
    monkeypatch.setenv("WEATHER_API_KEY", "")

    with pytest.raises(SystemExit) as exc_info:
        main.main(["--city", "London", "--no-color"])

    assert exc_info.value.code == 1


def test_interactive_loop_searches_until_quit():
    machine = FetchStateMachine(StubClient(), "key")
    console = Mock()
    console.input.side_effect = ["London", "Atlantis", "quit"]
    states = []
    machine.subscribe(states.append)

    main.interactive_loop(machine, console)

    assert console.input.call_count == 3
    assert isinstance(states[1], Success)
    assert isinstance(states[-1], Error)


def test_interactive_loop_stops_on_eof():
    machine = FetchStateMachine(StubClient(), "key")
    console = Mock()
    console.input.side_effect = EOFError

    main.interactive_loop(machine, console)

    assert machine.state == Idle()


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX SIGINT delivery")
def test_ctrl_c_at_prompt_exits():
    """Ctrl-C while waiting for a city ends the session."""
    here = os.path.dirname(os.path.abspath(__file__))
    code = (
        "import signal; signal.signal(signal.SIGINT, signal.default_int_handler); "
        "import main; main.main(['--no-color'])"
    )
    env = dict(os.environ, WEATHER_API_KEY="", PYTHONUNBUFFERED="1")
    proc = subprocess.Popen(
        [sys.executable, "-c", code],
        cwd=here,
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    output = []
    reader = threading.Thread(target=lambda: output.append(proc.stdout.read()), daemon=True)
    try:
        reader.start()
        # Startup plus the idle screen; the prompt follows right after
        time.sleep(3)
        proc.send_signal(signal.SIGINT)
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
        pytest.fail("interactive session still running after SIGINT")
    finally:
        proc.stdin.close()

    reader.join(timeout=5)
    assert proc.returncode == 0
    assert b"Bye." in b"".join(output)
