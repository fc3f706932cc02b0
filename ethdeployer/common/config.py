"""
Contract-creation rules per hardfork.

Each rule set fixes the behaviour of the host's creation primitive:
the nonce a fresh contract starts with, runtime and init code size limits,
and whether runtime code may start with 0xEF.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# EIP-170
MAX_CODE_SIZE = 24_576
# EIP-3860
MAX_INITCODE_SIZE = 2 * MAX_CODE_SIZE

DEFAULT_MAX_INIT_STEPS = 1_000_000


@dataclass(frozen=True)
class CreateRules:
    name: str = "shanghai"

    # EIP-161: contract accounts start at nonce 1
    contract_initial_nonce: int = 1

    max_code_size: Optional[int] = MAX_CODE_SIZE         # EIP-170
    max_initcode_size: Optional[int] = MAX_INITCODE_SIZE  # EIP-3860
    reject_ef_code: bool = True                           # EIP-3541

    # Init code has no gas here; bound the interpreter instead.
    max_init_steps: int = DEFAULT_MAX_INIT_STEPS

    def code_size_ok(self, code: bytes) -> bool:
        return self.max_code_size is None or len(code) <= self.max_code_size

    def initcode_size_ok(self, init_code: bytes) -> bool:
        return self.max_initcode_size is None or len(init_code) <= self.max_initcode_size

    def code_prefix_ok(self, code: bytes) -> bool:
        return not (self.reject_ef_code and code[:1] == b"\xef")


# ---------------------------------------------------------------------------
# Well-known rule sets
# ---------------------------------------------------------------------------

FRONTIER_RULES = CreateRules(
    name="frontier",
    contract_initial_nonce=0,
    max_code_size=None,
    max_initcode_size=None,
    reject_ef_code=False,
)

SPURIOUS_DRAGON_RULES = CreateRules(
    name="spurious_dragon",
    max_initcode_size=None,
    reject_ef_code=False,
)

LONDON_RULES = CreateRules(
    name="london",
    max_initcode_size=None,
)

SHANGHAI_RULES = CreateRules(name="shanghai")

DEFAULT_RULES = SHANGHAI_RULES

RULES_BY_NAME: dict[str, CreateRules] = {
    rules.name: rules
    for rules in (FRONTIER_RULES, SPURIOUS_DRAGON_RULES, LONDON_RULES, SHANGHAI_RULES)
}


def get_rules(name: str) -> CreateRules:
    """Look up a rule set by hardfork name (case-insensitive)."""
    try:
        return RULES_BY_NAME[name.lower()]
    except KeyError:
        known = ", ".join(sorted(RULES_BY_NAME))
        raise ValueError(f"Unknown hardfork {name!r} (known: {known})") from None
