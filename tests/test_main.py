"""Command line parsing."""

import pytest

import main as main_module
from main import build_parser


def test_sync_is_the_default_command():
    args = build_parser().parse_args([])
    assert args.command is None
    assert args.environment == "development"
    assert args.env_file == ".env"


def test_inspect_arguments():
    args = build_parser().parse_args(
        ["--environment", "production", "inspect", "https://x", "--length", "50"]
    )
    assert (args.command, args.url, args.length) == ("inspect", "https://x", 50)
    assert args.environment == "production"


def test_unknown_environment_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--environment", "staging"])


ENV_KEYS = (
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
    "GRADES_JSON_API_ENDPOINT",
    "MATCH_JSON_API_ENDPOINT",
)


def test_invalid_configuration_alerts_with_env_file_credentials(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        # registered so teardown also removes what the .env file loads
        monkeypatch.setenv(key, "x")
        monkeypatch.delenv(key)
    env_file = tmp_path / ".env"
    env_file.write_text("TELEGRAM_BOT_TOKEN=123:abc\nTELEGRAM_CHAT_ID=-100\n")

    created = []

    class RecordingNotifier:
        def __init__(self, config):
            self.config = config
            self.messages = []
            created.append(self)

        def notify(self, text):
            self.messages.append(text)
            return True

    monkeypatch.setattr(main_module, "TelegramNotifier", RecordingNotifier)

    assert main_module.main(["--env-file", str(env_file), "sync"]) == 1

    assert len(created) == 1
    assert created[0].config.bot_token == "123:abc"
    assert created[0].config.chat_id == "-100"
    assert created[0].messages[0].startswith("Fatal error:")
    assert "GRADES_JSON_API_ENDPOINT" in created[0].messages[0]
