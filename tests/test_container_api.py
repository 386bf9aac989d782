import functools
from importlib.metadata import version

import pytest

import wirebox
from wirebox import AutoInstantiationError, Binding, BindingKind, Container, ContainerError


class Logger:
    def __init__(self, name: str = "default"):
        self.name = name


class EmailHandler:
    pass


class SmsHandler:
    pass


class PushHandler:
    pass


class Clock:
    def __call__(self):
        return 42


# --- instance registration ---

def test_register_existing_instance(container):
    logger = Logger("test_logger")
    result = container.instance("logger", logger)

    assert result is container
    assert container.make("logger") is logger
    assert container.make("logger", {"name": "ignored"}) is logger


def test_auto_instantiate_with_instance_method(container):
    result = container.instance(Logger)

    assert result is container
    assert container.bound(Logger)
    first = container.make(Logger)
    assert isinstance(first, Logger)
    assert container.make(Logger) is first


def test_auto_instantiate_unknown_class_fails(container):
    with pytest.raises(AutoInstantiationError) as exc_info:
        container.instance("not_a_class")

    assert exc_info.value.key == "not_a_class"
    assert isinstance(exc_info.value, ContainerError)


def test_instance_mapping_skips_plain_values(container):
    email, sms = EmailHandler(), SmsHandler()
    container.instance({"email": email, "sms": sms, "port": 25, "name": "x"})

    assert container.make("email") is email
    assert container.make("sms") is sms
    assert not container.bound("port")
    assert not container.bound("name")


def test_instance_replaces_previous_binding(container):
    container.singleton("logger", Logger)
    container.make("logger")
    replacement = Logger("replacement")

    container.instance("logger", replacement)

    assert container.make("logger") is replacement
    assert container.bindings()["logger"].kind is BindingKind.INSTANCE


# --- bound / forget ---

def test_bound(container):
    assert not container.bound("logger")
    container.bind("logger", Logger)
    assert container.bound("logger")


def test_bound_through_alias(container):
    container.bind("logger", Logger)
    container.alias("logger", "log")

    assert container.bound("log")


def test_unset_forgets_service(container):
    container.singleton("logger", Logger)
    container.make("logger")

    container.unset("logger")

    assert not container.bound("logger")
    assert not container.has("logger")


def test_bind_rejects_plain_data(container):
    with pytest.raises(TypeError):
        container.bind("port", 8080)


# --- get / set / has ---

def test_get_prefers_config_then_service_then_fallback(container):
    container.set_config("database.host", "localhost")
    container.bind("logger", Logger)

    assert container.get("database.host") == "localhost"
    assert isinstance(container.get("logger"), Logger)
    assert container.get("missing", "default") == "default"
    assert container.get("missing") is None


def test_get_accepts_class_keys(container):
    container.singleton(Logger)
    assert container.get(Logger) is container.make(Logger)
    assert container.get(EmailHandler, "nope") == "nope"


def test_set_routes_by_value(container):
    handler = EmailHandler()
    factory = functools.partial(Logger, "partial")

    container.set("handler", handler)
    container.set("logger_class", Logger)
    container.set("logger_factory", lambda c: Logger("factory"))
    container.set("logger_partial", factory)
    container.set("logger_by_name", f"{Logger.__module__}.Logger")
    container.set("clock", Clock())
    container.set("app.name", "demo")
    container.set("app.ports", [80, 443])

    assert container.make("handler") is handler
    assert isinstance(container.make("logger_class"), Logger)
    assert container.make("logger_factory").name == "factory"
    assert container.make("logger_partial").name == "partial"
    assert isinstance(container.make("logger_by_name"), Logger)
    assert isinstance(container.make("clock"), Clock)
    assert container.get_config("app") == {"name": "demo", "ports": [80, 443]}


def test_set_returns_container(container):
    assert container.set("a", 1).set("b", 2) is container


def test_has_checks_config_and_services(container):
    container.set_config("feature.enabled", True)
    container.bind("logger", Logger)

    assert container.has("feature.enabled")
    assert container.has("logger")
    assert not container.has("nothing")


# --- tags ---

def test_tag_single_service(container):
    container.bind("email_handler", EmailHandler)
    container.tag("handlers", "email_handler")

    tagged = container.tagged("handlers")

    assert len(tagged) == 1
    assert isinstance(tagged[0], EmailHandler)


def test_tag_preserves_order(container):
    container.bind("email_handler", EmailHandler)
    container.bind("sms_handler", SmsHandler)
    container.bind("push_handler", PushHandler)

    container.tag("handlers", ["email_handler", "sms_handler"])
    container.tag("handlers", "push_handler")

    assert [type(h) for h in container.tagged("handlers")] == [EmailHandler, SmsHandler, PushHandler]


def test_tag_allows_duplicates_and_resolves_lazily(container):
    container.tag("loggers", ["logger", "logger"])
    container.bind("logger", Logger)

    first, second = container.tagged("loggers")
    assert isinstance(first, Logger) and isinstance(second, Logger)
    assert first is not second


def test_tagged_unknown_tag_is_empty(container):
    assert container.tagged("unknown_tag") == []


def test_tagged_unbound_member_resolves_to_none(container):
    container.tag("group", "ghost")
    assert container.tagged("group") == [None]


# --- flush / introspection ---

def test_flush_clears_everything(container):
    container.set_config("a.b", 1)
    container.singleton("logger", Logger)
    container.alias("logger", "log")
    container.tag("group", "logger")
    container.make("logger")

    container.flush()

    assert not container.has_config("a")
    assert not container.bound("logger")
    assert not container.bound("log")
    assert container.tagged("group") == []
    assert dict(container.aliases()) == {}
    assert dict(container.bindings()) == {}


def test_snapshots_are_read_only(container):
    container.bind("logger", Logger)
    bindings = container.bindings()

    assert bindings["logger"] == Binding("logger", f"{Logger.__module__}.Logger", False, BindingKind.IDENTIFIER)
    with pytest.raises(TypeError):
        bindings["other"] = None


def test_context_property():
    assert Container.create(context="app").context == "app"


def test_version_comes_from_package_metadata():
    assert wirebox.__version__ == version("wirebox")
