import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest
from openai import AsyncOpenAI

from llm_consensus.core.runner import query_with_deadline, run_models
from llm_consensus.errors import (
    AllModelsFailedError,
    ConfigurationError,
    ProviderError,
    QueryTimeoutError,
)
from llm_consensus.models.query import QueryRequest, QueryResponse
from llm_consensus.providers.anthropic import AnthropicProvider
from llm_consensus.providers.base import BaseProvider, FunctionProvider
from llm_consensus.providers.google import GoogleProvider
from llm_consensus.providers.openai import OpenAIProvider
from llm_consensus.providers.registry import Registry
from llm_consensus.utils.protocols import Provider

REQUEST = QueryRequest(model="m", prompt="hello")


async def agen(items):
	for item in items:
		yield item


# -- base provider ---------------------------------------------------------


class ChunkedProvider(BaseProvider):
	name = "chunked"

	def __init__(self, chunks=(), error=None):
		self.chunks = list(chunks)
		self.error = error

	async def _complete(self, request):
		if self.error:
			raise self.error
		return "".join(self.chunks)

	async def _stream(self, request, emit):
		for chunk in self.chunks:
			emit(chunk)
		if self.error:
			raise self.error


class CompleteOnlyProvider(BaseProvider):
	name = "complete-only"

	async def _complete(self, request):
		return f"echo: {request.prompt}"


@pytest.mark.asyncio
async def test_stream_chunks_concatenate_to_content():
	provider = ChunkedProvider(["Hel", "", "lo", " there"])
	seen = []
	res = await provider.query_stream(REQUEST, seen.append)
	assert seen == ["Hel", "lo", " there"]
	assert "".join(seen) == res.content == "Hello there"
	assert res.model == "m"
	assert res.provider == "chunked"
	assert res.latency.total_seconds() >= 0


@pytest.mark.asyncio
async def test_default_stream_emits_full_content_once():
	provider = CompleteOnlyProvider()
	seen = []
	res = await provider.query_stream(REQUEST, seen.append)
	assert seen == ["echo: hello"]
	assert res.content == "echo: hello"


@pytest.mark.asyncio
async def test_query_without_callback():
	res = await CompleteOnlyProvider().query_stream(REQUEST)
	assert res.content == "echo: hello"
	res = await CompleteOnlyProvider().query(REQUEST)
	assert res.content == "echo: hello"


@pytest.mark.asyncio
async def test_vendor_errors_are_wrapped():
	provider = ChunkedProvider(error=RuntimeError("connection refused"))
	with pytest.raises(ProviderError) as exc_info:
		await provider.query(REQUEST)
	assert str(exc_info.value) == "connection refused"
	assert exc_info.value.provider == "chunked"


@pytest.mark.asyncio
async def test_empty_content_is_an_error():
	provider = ChunkedProvider([])
	with pytest.raises(ProviderError, match="no content in response"):
		await provider.query_stream(REQUEST)
	with pytest.raises(ProviderError, match="no content in response"):
		await provider.query(REQUEST)


# -- function provider -----------------------------------------------------


@pytest.mark.asyncio
async def test_function_provider_sync_and_async():

	def sync_fn(req):
		return QueryResponse(model=req.model, content="sync", provider="f")

	async def async_fn(req):
		return QueryResponse(model=req.model, content="async", provider="f")

	assert (await FunctionProvider(sync_fn).query(REQUEST)).content == "sync"
	seen = []
	res = await FunctionProvider(async_fn).query_stream(REQUEST, seen.append)
	assert res.content == "async"
	assert seen == ["async"]


@pytest.mark.asyncio
async def test_function_provider_errors_propagate_unchanged():

	def failing(req):
		raise ValueError("boom")

	with pytest.raises(ValueError, match="boom"):
		await FunctionProvider(failing).query_stream(REQUEST)


def test_providers_satisfy_protocol():
	provider = FunctionProvider(lambda req: None, name="fn")
	assert isinstance(provider, Provider)
	assert isinstance(CompleteOnlyProvider(), Provider)


# -- openai ----------------------------------------------------------------


class TrackedEvents:
	"""Async event iterator that records whether it was closed."""

	def __init__(self, events, hang=False):
		self.events = list(events)
		self.hang = hang
		self.closed = False

	async def _iterate(self):
		for event in self.events:
			yield event
		if self.hang:
			await asyncio.sleep(3600)

	def __aiter__(self):
		return self._iterate()

	async def close(self):
		self.closed = True

	async def aclose(self):
		self.closed = True


class FakeOpenAIResponses:

	def __init__(self, text="", events=(), error=None):
		self.text = text
		self.events = list(events)
		self.error = error
		self.calls = []

	async def create(self, **kwargs):
		self.calls.append(kwargs)
		if self.error:
			raise self.error
		if kwargs.get("stream"):
			self.stream = TrackedEvents(self.events)
			return self.stream
		return SimpleNamespace(output_text=self.text)


def openai_client(**kwargs):
	return SimpleNamespace(responses=FakeOpenAIResponses(**kwargs))


@pytest.mark.asyncio
async def test_openai_query():
	client = openai_client(text="answer")
	provider = OpenAIProvider(client=client)
	res = await provider.query(REQUEST)
	assert res.content == "answer"
	assert res.provider == "openai"
	assert client.responses.calls == [{"model": "m", "input": "hello"}]


@pytest.mark.asyncio
async def test_openai_stream_text_deltas():
	events = [
	    SimpleNamespace(type="response.created"),
	    SimpleNamespace(type="response.output_text.delta", delta="Hi"),
	    SimpleNamespace(type="response.output_text.delta", delta=" there"),
	    SimpleNamespace(type="response.completed"),
	]
	client = openai_client(events=events)
	seen = []
	res = await OpenAIProvider(client=client).query_stream(REQUEST, seen.append)
	assert seen == ["Hi", " there"]
	assert res.content == "Hi there"
	assert client.responses.calls[0]["stream"] is True


@pytest.mark.asyncio
async def test_openai_stream_error_event():
	events = [
	    SimpleNamespace(type="response.output_text.delta", delta="par"),
	    SimpleNamespace(type="error", message="overloaded"),
	]
	provider = OpenAIProvider(client=openai_client(events=events))
	with pytest.raises(ProviderError, match="stream error: overloaded"):
		await provider.query_stream(REQUEST)
	assert provider.client.responses.stream.closed


@pytest.mark.asyncio
async def test_openai_sdk_error_is_wrapped():
	client = openai_client(error=RuntimeError("401 invalid api key"))
	with pytest.raises(ProviderError) as exc_info:
		await OpenAIProvider(client=client).query(REQUEST)
	assert exc_info.value.provider == "openai"
	assert "401" in str(exc_info.value)


def test_openai_requires_api_key():
	with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
		OpenAIProvider(None)


# -- anthropic -------------------------------------------------------------


class FakeAnthropicStream:

	def __init__(self, texts):
		self.text_stream = agen(texts)

	async def __aenter__(self):
		return self

	async def __aexit__(self, exc_type, exc, tb):
		return False


class FakeAnthropicMessages:

	def __init__(self, blocks=(), texts=()):
		self.blocks = list(blocks)
		self.texts = list(texts)
		self.calls = []

	async def create(self, **kwargs):
		self.calls.append(kwargs)
		return SimpleNamespace(content=self.blocks)

	def stream(self, **kwargs):
		self.calls.append(kwargs)
		return FakeAnthropicStream(self.texts)


@pytest.mark.asyncio
async def test_anthropic_query_joins_text_blocks():
	messages = FakeAnthropicMessages(blocks=[
	    SimpleNamespace(type="text", text="Hello "),
	    SimpleNamespace(type="tool_use", name="x"),
	    SimpleNamespace(type="text", text="world"),
	])
	provider = AnthropicProvider(client=SimpleNamespace(messages=messages),
	                             max_tokens=123)
	res = await provider.query(REQUEST)
	assert res.content == "Hello world"
	assert res.provider == "anthropic"
	assert messages.calls == [{
	    "model": "m",
	    "max_tokens": 123,
	    "messages": [{
	        "role": "user",
	        "content": "hello"
	    }],
	}]


@pytest.mark.asyncio
async def test_anthropic_stream():
	messages = FakeAnthropicMessages(texts=["a", "b", "c"])
	provider = AnthropicProvider(client=SimpleNamespace(messages=messages))
	seen = []
	res = await provider.query_stream(REQUEST, seen.append)
	assert seen == ["a", "b", "c"]
	assert res.content == "abc"
	assert messages.calls[0]["max_tokens"] == 4096


def test_anthropic_requires_api_key():
	with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
		AnthropicProvider("")


# -- google ----------------------------------------------------------------


class FakeGoogleModels:

	def __init__(self, text="", chunks=(), hang=False):
		self.text = text
		self.chunks = list(chunks)
		self.hang = hang
		self.stream = None
		self.calls = []

	async def generate_content(self, **kwargs):
		self.calls.append(kwargs)
		return SimpleNamespace(text=self.text)

	async def generate_content_stream(self, **kwargs):
		self.calls.append(kwargs)
		self.stream = TrackedEvents(
		    [SimpleNamespace(text=t) for t in self.chunks], hang=self.hang)
		return self.stream


def google_client(**kwargs):
	return SimpleNamespace(aio=SimpleNamespace(
	    models=FakeGoogleModels(**kwargs)))


@pytest.mark.asyncio
async def test_google_query():
	client = google_client(text="gemini says")
	res = await GoogleProvider(client=client).query(REQUEST)
	assert res.content == "gemini says"
	assert res.provider == "google"
	assert client.aio.models.calls == [{"model": "m", "contents": "hello"}]


@pytest.mark.asyncio
async def test_google_stream_skips_empty_chunks():
	client = google_client(chunks=["one", None, " two"])
	seen = []
	res = await GoogleProvider(client=client).query_stream(REQUEST, seen.append)
	assert seen == ["one", " two"]
	assert res.content == "one two"
	assert client.aio.models.stream.closed


@pytest.mark.asyncio
async def test_google_empty_response_is_error():
	client = google_client(text=None)
	with pytest.raises(ProviderError, match="no content in response"):
		await GoogleProvider(client=client).query(REQUEST)


def test_google_requires_api_key():
	with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
		GoogleProvider()


@pytest.mark.asyncio
async def test_google_stream_closed_on_timeout():
	client = google_client(chunks=["partial"], hang=True)
	provider = GoogleProvider(client=client)
	with pytest.raises(QueryTimeoutError):
		await query_with_deadline(provider.query_stream(REQUEST), 0.05)
	assert client.aio.models.stream.closed


# -- vendor stream release over HTTP ---------------------------------------


def sse(payload):
	return f"data: {json.dumps(payload)}\n\n".encode()


def text_delta(delta, seq):
	return sse({
	    "type": "response.output_text.delta",
	    "delta": delta,
	    "item_id": "msg_1",
	    "output_index": 0,
	    "content_index": 0,
	    "sequence_number": seq,
	})


class TrackedBody(httpx.AsyncByteStream):
	"""Server-sent event body that records whether it was closed."""

	def __init__(self, chunks, hang=False):
		self.chunks = list(chunks)
		self.hang = hang
		self.closed = False

	async def __aiter__(self):
		for chunk in self.chunks:
			yield chunk
		if self.hang:
			await asyncio.sleep(3600)

	async def aclose(self):
		self.closed = True


def openai_over_http(body):
	"""OpenAIProvider backed by the real SDK and a canned HTTP stream."""

	def handler(request):
		return httpx.Response(
		    200,
		    headers={"content-type": "text/event-stream"},
		    stream=body,
		)

	http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
	client = AsyncOpenAI(
	    api_key="sk-test",
	    base_url="http://testserver/v1",
	    http_client=http_client,
	    max_retries=0,
	)
	return OpenAIProvider(client=client), http_client


@pytest.mark.asyncio
async def test_openai_http_stream_closed_after_error_event():
	body = TrackedBody([
	    text_delta("par", 1),
	    sse({
	        "type": "error",
	        "message": "boom",
	        "code": None,
	        "param": None,
	        "sequence_number": 2,
	    }),
	    text_delta("tial", 3),
	])
	provider, http_client = openai_over_http(body)
	registry = Registry()
	registry.register("m", provider)
	try:
		with pytest.raises(AllModelsFailedError,
		                   match="m: stream error: boom"):
			await run_models(registry, ["m"], "hi", timeout=5)
	finally:
		await http_client.aclose()
	assert body.closed


@pytest.mark.asyncio
async def test_openai_http_stream_closed_after_timeout():
	body = TrackedBody([text_delta("slow", 1)], hang=True)
	provider, http_client = openai_over_http(body)
	registry = Registry()
	registry.register("m", provider)
	try:
		with pytest.raises(AllModelsFailedError, match="m: timed out"):
			await run_models(registry, ["m"], "hi", timeout=0.2)
	finally:
		await http_client.aclose()
	assert body.closed
