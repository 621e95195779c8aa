import unittest
from unittest.mock import MagicMock

import requests

from jobmatch.ai.completion_client import CompletionClient, CompletionRequest
from jobmatch.config import CompletionConfig
from jobmatch.exceptions import CompletionServiceError


def _response(status=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class CompletionClientTests(unittest.TestCase):
    def setUp(self):
        self.config = CompletionConfig(
            base_url="http://ai.test/api/generate",
            model="test-model",
            max_retries=2,
            backoff_min=0,
            backoff_max=0,
        )
        self.session = MagicMock()
        self.client = CompletionClient(self.config, session=self.session)
        self.request = CompletionRequest(
            prompt="Rank these jobs",
            system_message="You are a matcher",
            user_id="u-1",
            feature_name="job_matching",
        )

    def test_posts_payload_and_returns_content(self):
        self.session.post.return_value = _response(body={"content": "[]"})

        response = self.client.complete(self.request, timeout=12)

        self.assertEqual(response.content, "[]")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://ai.test/api/generate")
        self.assertEqual(kwargs["timeout"], 12)
        self.assertEqual(kwargs["json"], {
            "model": "test-model",
            "systemMessage": "You are a matcher",
            "prompt": "Rank these jobs",
            "userId": "u-1",
            "feature_name": "job_matching",
        })

    def test_default_timeout_is_ranking_timeout(self):
        self.session.post.return_value = _response(body={"content": "{}"})
        self.client.complete(self.request)

        self.assertEqual(self.session.post.call_args[1]["timeout"], 60.0)

    def test_non_json_body_returned_as_text(self):
        self.session.post.return_value = _response(text="Sure! [1, 2]")
        self.assertEqual(self.client.complete(self.request).content, "Sure! [1, 2]")

    def test_missing_content_gives_empty_string(self):
        self.session.post.return_value = _response(body={"error": None})
        self.assertEqual(self.client.complete(self.request).content, "")

    def test_retries_server_errors_then_succeeds(self):
        self.session.post.side_effect = [
            _response(status=503),
            _response(body={"content": "ok"}),
        ]

        self.assertEqual(self.client.complete(self.request).content, "ok")
        self.assertEqual(self.session.post.call_count, 2)

    def test_network_error_after_retries(self):
        self.session.post.side_effect = requests.ConnectionError("refused")

        with self.assertRaises(CompletionServiceError) as ctx:
            self.client.complete(self.request)

        self.assertEqual(ctx.exception.error_type, "network")
        self.assertTrue(ctx.exception.retryable)
        self.assertEqual(self.session.post.call_count, 3)

    def test_timeout_error(self):
        self.session.post.side_effect = requests.Timeout("slow")

        with self.assertRaises(CompletionServiceError) as ctx:
            self.client.complete(self.request)

        self.assertEqual(ctx.exception.error_type, "timeout")
        self.assertEqual(self.session.post.call_count, 3)

    def test_rate_limit_is_retried(self):
        self.session.post.side_effect = [_response(status=429), _response(body={"content": "x"})]

        self.assertEqual(self.client.complete(self.request).content, "x")

    def test_client_error_not_retried(self):
        self.session.post.return_value = _response(status=400)

        with self.assertRaises(CompletionServiceError) as ctx:
            self.client.complete(self.request)

        self.assertEqual(ctx.exception.error_type, "client")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertFalse(ctx.exception.retryable)
        self.assertEqual(self.session.post.call_count, 1)

    def test_garbage_content_not_retried(self):
        self.session.post.return_value = _response(body={"content": "not json at all"})

        self.assertEqual(self.client.complete(self.request).content, "not json at all")
        self.assertEqual(self.session.post.call_count, 1)

    def test_request_model_overrides_default(self):
        request = CompletionRequest(prompt="p", model="other-model")
        self.assertEqual(request.to_payload("test-model")["model"], "other-model")


if __name__ == "__main__":
    unittest.main()
