import pytest

from snipecord.models import Course, Section


def make_course(title, *sections):
    """Course with (number, index) section pairs."""
    return Course(title=title, sections=[Section(number=n, index=i) for n, i in sections])


@pytest.fixture
def courses():
    return [
        make_course("CALCULUS I", ("01", "01234"), ("02", "01235")),
        make_course("INTRO COMPUTER SCI", ("01", "05678")),
    ]


@pytest.fixture(autouse=True)
def no_webhook_override(monkeypatch):
    # SNIPECORD_WEBHOOK in the developer's environment must not leak into tests
    monkeypatch.setattr("snipecord.config.WEBHOOK_URL_OVERRIDE", "")
