import pytest

from usecase_runner.engine import EngineInvoker, UseCase
from usecase_runner.errors import EngineExecutionError


class SampleUseCase(UseCase):
    def operations(self):
        return {"op"}


class RecordingEngine:
    def __init__(self):
        self.calls = []

    def run(self, source_root, use_case):
        self.calls.append((source_root, use_case))


def test_engine_object_is_called_once(tmp_path):
    engine = RecordingEngine()
    use_case = SampleUseCase()

    EngineInvoker(engine).invoke(tmp_path, use_case)

    assert engine.calls == [(str(tmp_path.resolve()), use_case)]


def test_plain_callable_engine(tmp_path):
    calls = []

    EngineInvoker(lambda root, uc: calls.append(root)).invoke(tmp_path, SampleUseCase())

    assert calls == [str(tmp_path.resolve())]


def test_engine_failure_is_wrapped_with_context(tmp_path):
    def engine(root, use_case):
        raise RuntimeError("cannot parse Foo.java")

    with pytest.raises(EngineExecutionError) as excinfo:
        EngineInvoker(engine).invoke(tmp_path, SampleUseCase(), "my.UseCase")

    error = excinfo.value
    assert error.source_root == str(tmp_path.resolve())
    assert error.usecase == "my.UseCase"
    assert "cannot parse Foo.java" in str(error)
    assert isinstance(error.__cause__, RuntimeError)


def test_engine_is_not_retried(tmp_path):
    attempts = []

    def engine(root, use_case):
        attempts.append(root)
        raise RuntimeError("flaky")

    with pytest.raises(EngineExecutionError):
        EngineInvoker(engine).invoke(tmp_path, SampleUseCase())

    assert len(attempts) == 1


def test_default_name_is_the_usecase_class(tmp_path):
    def engine(root, use_case):
        raise ValueError("bad")

    with pytest.raises(EngineExecutionError) as excinfo:
        EngineInvoker(engine).invoke(tmp_path, SampleUseCase())

    assert excinfo.value.usecase.endswith("SampleUseCase")
