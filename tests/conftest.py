import pytest

from config.settings import TestingConfig
from orchestrator.controller import WizardController
from tools.connectivity import ConnectivitySignal
from tools.voice import RecordingVoice


@pytest.fixture
def settings() -> TestingConfig:
    return TestingConfig()


@pytest.fixture
def voice() -> RecordingVoice:
    return RecordingVoice(keep_history=True)


@pytest.fixture
def connectivity() -> ConnectivitySignal:
    return ConnectivitySignal(online=False)


@pytest.fixture
def controller(voice, connectivity, settings) -> WizardController:
    wizard = WizardController(voice, connectivity, settings=settings)
    yield wizard
    wizard.close()
