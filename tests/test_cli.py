import io
import unittest
from unittest import mock

import requests
from rich.console import Console

from ghmodels import cli
from ghmodels.errors import StatusError
from ghmodels.types import ChatResponse, Choice, Message, ModelResponse

ENV = {"GITHUB_TOKEN": "tok"}


class CliTests(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.console = Console(file=self.out, width=200)
        self.err_console = Console(file=self.err, width=200)
        patcher = mock.patch.object(cli, "Client")
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.llm = self.client_cls.return_value

    def run_cli(self, argv, environ=ENV):
        return cli.main(argv, environ=environ, console=self.console, err_console=self.err_console)

    def test_missing_token(self):
        self.assertEqual(self.run_cli([], environ={}), 1)
        self.assertIn("GITHUB_TOKEN environment variable is not set", self.err.getvalue())
        self.client_cls.assert_not_called()

    def test_chat_prints_conversation(self):
        self.llm.create_chat.return_value = ChatResponse(
            choices=[Choice(Message("assistant", "Paris [capital]"), "stop")]
        )
        self.assertEqual(self.run_cli(["-message", "Capital of France?"]), 0)
        self.client_cls.assert_called_once_with("tok", "openai/gpt-4.1")
        req = self.llm.create_chat.call_args[0][1]
        self.assertEqual(req.model, "")
        self.assertEqual([m.role for m in req.messages], ["system", "user"])
        self.assertEqual(req.messages[1].content, "Capital of France?")
        text = self.out.getvalue()
        self.assertIn("Using model openai/gpt-4.1", text)
        self.assertIn("system: You are a helpful assistant.", text)
        self.assertIn("user: Capital of France?", text)
        self.assertIn("assistant: Paris [capital]", text)

    def test_model_flag_overrides_env(self):
        self.llm.create_chat.return_value = ChatResponse()
        env = dict(ENV, GITHUB_MODELS_MODEL="xai/grok-3")
        self.assertEqual(self.run_cli(["--model", "meta/llama"], environ=env), 0)
        self.client_cls.assert_called_once_with("tok", "meta/llama")

    def test_chat_error_exits_non_zero(self):
        self.llm.create_chat.side_effect = StatusError(401, "boom")
        self.assertEqual(self.run_cli([]), 1)
        self.assertIn("Error creating chat: GitHub Models API error: boom (status code: 401)", self.err.getvalue())

    def test_transport_error_exits_non_zero(self):
        self.llm.list_models.side_effect = requests.ConnectionError("unreachable")
        self.assertEqual(self.run_cli(["-models"]), 1)
        self.assertIn("Error listing models: unreachable", self.err.getvalue())

    def test_models_table(self):
        self.llm.list_models.return_value = [
            ModelResponse(id="openai/gpt-4.1", publisher="OpenAI", rate_limit_tier="high", tags=["multipurpose"]),
            ModelResponse(id="meta/llama-3.3-70b-instruct", publisher="Meta"),
        ]
        self.assertEqual(self.run_cli(["-models", "-filter", "GPT"]), 0)
        text = self.out.getvalue()
        self.assertIn("openai/gpt-4.1", text)
        self.assertIn("multipurpose", text)
        self.assertNotIn("llama", text)
        self.assertIn("1 model(s)", text)
        self.llm.create_chat.assert_not_called()

    def test_models_empty(self):
        self.llm.list_models.return_value = []
        self.assertEqual(self.run_cli(["--models"]), 0)
        self.assertIn("No models returned", self.out.getvalue())

    def test_help(self):
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as cm:
                self.run_cli(["-help"])
        self.assertEqual(cm.exception.code, 0)
        self.assertIn("-models", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
