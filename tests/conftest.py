"""Pytest configuration and shared fixtures for all tests."""

import pytest

from ethdeployer.common.config import DEFAULT_RULES
from ethdeployer.create.deployer import Deployer
from ethdeployer.vm.hooks import ExecutionHook
from ethdeployer.vm.host import InMemoryHost

from tests.fixtures.addresses import (
    ALICE_ADDRESS,
    BOB_ADDRESS,
    DEPLOYER_ADDRESS,
)


# =============================================================================
# Addresses
# =============================================================================

@pytest.fixture
def bob_address():
    return BOB_ADDRESS


# =============================================================================
# Host and deployer
# =============================================================================

class RecordingHook(ExecutionHook):
    """Collects every hook call for assertions."""

    def __init__(self):
        self.created: list = []
        self.failed: list = []
        self.logs: list = []
        self.balance_changes: list = []

    def after_create(self, frame, address):
        if address is None:
            self.failed.append(frame.address)
        else:
            self.created.append(address)

    def on_log(self, log):
        self.logs.append(log)

    def on_balance_change(self, address, old_balance, new_balance):
        self.balance_changes.append((address, old_balance, new_balance))


@pytest.fixture
def hook():
    return RecordingHook()


@pytest.fixture
def host(hook):
    """In-memory host with Alice funded and an unfunded deployer account."""
    h = InMemoryHost(rules=DEFAULT_RULES, hook=hook)
    h.install(ALICE_ADDRESS, balance=10**18)
    h.install(BOB_ADDRESS, balance=0)
    h.install(DEPLOYER_ADDRESS, balance=0, nonce=1)
    return h


@pytest.fixture
def deployer(host):
    return Deployer(host, DEPLOYER_ADDRESS)


@pytest.fixture
def funded_deployer(host, deployer):
    host.set_balance(DEPLOYER_ADDRESS, 1_000)
    return deployer
