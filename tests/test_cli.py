import pytest

from chatclient.ui.cli import ChatCLI


class Console:
    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []
        self.printed = []

    def input(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, *args):
        self.printed.append(" ".join(str(arg) for arg in args))


def make_cli(console, client_config):
    return ChatCLI(input_func=console.input, output=console.print, config=client_config)


def test_handle_prompt_retries_until_valid(client_config):
    console = Console("bad handle", "waytoolonghandle", "alice")
    cli = make_cli(console, client_config)
    assert cli.prompt_handle() == "alice"
    assert len(console.prompts) == 3
    assert len(console.printed) == 2


def test_handle_prompt_eof(client_config):
    cli = make_cli(Console(), client_config)
    assert cli.prompt_handle() is None
    assert cli.eof


def test_read_outbound_builds_prefixed_payload(client_config):
    console = Console("alice", "hello there\n")
    cli = make_cli(console, client_config)
    cli.prompt_handle()
    assert cli.read_outbound() == b"alice> hello there"
    assert console.prompts[-1] == "alice> "


def test_read_outbound_quit(client_config):
    console = Console("alice", "\\quit")
    cli = make_cli(console, client_config)
    cli.prompt_handle()
    assert cli.read_outbound() is None
    assert not cli.eof


def test_read_outbound_reprompts_on_long_message(client_config):
    console = Console("alice", "x" * 501, "short")
    cli = make_cli(console, client_config)
    cli.prompt_handle()
    assert cli.read_outbound() == b"alice> short"
    assert any("Invalid message length" in line for line in console.printed)


def test_read_outbound_requires_handle(client_config):
    with pytest.raises(RuntimeError):
        make_cli(Console("hi"), client_config).read_outbound()


def test_show_strips_c_terminator_and_replaces_bad_utf8(client_config):
    console = Console()
    cli = make_cli(console, client_config)
    cli.show(b"host> hi\x00")
    cli.show(b"host> \xff")
    assert console.printed == ["host> hi", "host> �"]


def test_error_lines_carry_program_name(client_config):
    console = Console("bad handle", "host")
    cli = ChatCLI(input_func=console.input, output=console.print, config=client_config, prog="chatserve")
    assert cli.prompt_handle() == "host"
    assert console.printed[0].startswith("chatserve: ")
