import threading

import pytest

from llm_consensus.errors import ModelNotFoundError
from llm_consensus.providers.base import FunctionProvider
from llm_consensus.providers.registry import Registry
from llm_consensus.models.query import QueryResponse


def make_provider(name="p"):
	return FunctionProvider(
	    lambda req: QueryResponse(model=req.model, content="x", provider=name),
	    name=name)


def test_register_and_get():
	registry = Registry()
	provider = make_provider()
	registry.register("m", provider)
	assert registry.get("m") is provider
	assert "m" in registry
	assert len(registry) == 1


def test_register_overwrites():
	registry = Registry()
	first, second = make_provider("a"), make_provider("b")
	registry.register("m", first)
	registry.register("m", second)
	assert registry.get("m") is second
	assert registry.list_models() == {"m"}


def test_get_unknown_model():
	registry = Registry()
	with pytest.raises(ModelNotFoundError) as exc_info:
		registry.get("nope")
	assert str(exc_info.value) == "unknown model: nope"
	assert exc_info.value.model == "nope"


def test_list_models_is_a_copy():
	registry = Registry()
	registry.register("a", make_provider())
	registry.register("b", make_provider())
	models = registry.list_models()
	models.add("c")
	assert registry.list_models() == {"a", "b"}


def test_concurrent_registration():
	registry = Registry()
	provider = make_provider()

	def worker(start):
		for i in range(start, start + 100):
			registry.register(f"m{i}", provider)
			registry.get(f"m{i}")

	threads = [threading.Thread(target=worker, args=(n * 100, ))
	           for n in range(8)]
	for t in threads:
		t.start()
	for t in threads:
		t.join()
	assert len(registry) == 800


def test_lookups_while_registering():
	registry = Registry()
	provider = make_provider()
	registry.register("base", provider)
	errors = []

	def reader():
		for _ in range(500):
			try:
				assert registry.get("base") is provider
				assert "base" in registry.list_models()
			except Exception as exc:
				errors.append(exc)

	def writer():
		for i in range(500):
			registry.register(f"w{i}", provider)

	threads = [threading.Thread(target=reader) for _ in range(4)]
	threads.append(threading.Thread(target=writer))
	for t in threads:
		t.start()
	for t in threads:
		t.join()
	assert errors == []
	assert len(registry) == 501
