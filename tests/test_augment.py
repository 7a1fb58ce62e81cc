from usecase_runner.engine.interface import UseCase
from usecase_runner.strategy import AugmentedUseCase, augment


class BaseUseCase(UseCase):
    def __init__(self):
        self.ops = {"op-a", "op-b"}
        self.predicate = lambda path: path.startswith("src/")

    def operations(self):
        return self.ops

    def prefiltering_predicate(self):
        return self.predicate

    def additional_classpath_entries(self):
        return {"/from/base.jar"}


def test_operations_are_forwarded():
    base = BaseUseCase()

    assert augment(base, ["/x.jar"]).operations() == base.operations()


def test_predicate_is_forwarded_unchanged():
    base = BaseUseCase()

    augmented = augment(base, [])

    assert augmented.prefiltering_predicate() is base.predicate
    assert augmented.prefiltering_predicate()("src/Foo.java") is True
    assert augmented.prefiltering_predicate()("test/Foo.java") is False


def test_classpath_entries_are_replaced_not_merged():
    entries = ["/r/a.jar", "/r/b.jar"]

    augmented = augment(BaseUseCase(), entries)

    assert augmented.additional_classpath_entries() == set(entries)


def test_empty_replacement_hides_base_entries():
    assert augment(BaseUseCase(), []).additional_classpath_entries() == set()


def test_base_is_not_modified():
    base = BaseUseCase()

    augment(base, ["/r/a.jar"])

    assert base.additional_classpath_entries() == {"/from/base.jar"}
    assert base.operations() == {"op-a", "op-b"}


def test_changes_to_base_operations_show_through():
    base = BaseUseCase()
    augmented = augment(base, [])

    base.ops = {"op-c"}

    assert augmented.operations() == {"op-c"}


def test_returned_entries_cannot_mutate_the_view():
    augmented = augment(BaseUseCase(), ["/r/a.jar"])

    augmented.additional_classpath_entries().add("/evil.jar")

    assert augmented.additional_classpath_entries() == {"/r/a.jar"}


def test_augmented_is_a_usecase():
    augmented = augment(BaseUseCase(), [])

    assert isinstance(augmented, UseCase)
    assert isinstance(augmented, AugmentedUseCase)
