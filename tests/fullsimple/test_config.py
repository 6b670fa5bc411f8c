import pytest
from pydantic import ValidationError

from fullsimple.config import Settings, load_settings
from fullsimple.core.pretty import RenderStyle
from fullsimple.core.reduce import EvalMode


def test_defaults() -> None:
    settings = Settings()
    assert settings.mode is EvalMode.SMALL_STEP
    assert settings.recover is False
    assert settings.max_steps is None
    assert settings.style is RenderStyle.NAMED


def test_overrides() -> None:
    settings = load_settings(mode="big-step", style="debruijn", max_steps=10)
    assert settings.mode is EvalMode.BIG_STEP
    assert settings.style is RenderStyle.DEBRUIJN
    assert settings.max_steps == 10


def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FULLSIMPLE_MODE", "big-step")
    monkeypatch.setenv("FULLSIMPLE_RECOVER", "true")
    monkeypatch.setenv("FULLSIMPLE_MAX_STEPS", "100")
    settings = Settings()
    assert settings.mode is EvalMode.BIG_STEP
    assert settings.recover is True
    assert settings.max_steps == 100


@pytest.mark.parametrize("bad", [0, -3])
def test_max_steps_must_be_positive(bad: int) -> None:
    with pytest.raises(ValidationError, match="max_steps must be positive"):
        Settings(max_steps=bad)


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(mode="lazy")
