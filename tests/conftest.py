from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from genproxy.config.runtime import RuntimeCallIndices, parse_call_indices

if TYPE_CHECKING:
    from pathlib import Path

CALL_INDICES_TOML = """\
system_origin = 0
signed_origin = 1
multi_address = true

[calls]
batch_all = [1, 2]
dispatch_as = [1, 3]
add_proxy = [22, 1]
remove_proxy = [22, 2]
sudo = [255, 0]

[proxy_types]
Any = 0
NonTransfer = 1
Governance = 2
Staking = 3
"""


@pytest.fixture
def call_indices() -> RuntimeCallIndices:
    return parse_call_indices(
        {
            "calls": {
                "batch_all": [1, 2],
                "dispatch_as": [1, 3],
                "add_proxy": [22, 1],
                "remove_proxy": [22, 2],
                "sudo": [255, 0],
            },
            "proxy_types": {"Any": 0, "NonTransfer": 1, "Governance": 2, "Staking": 3},
        }
    )


@pytest.fixture
def call_indices_file(tmp_path: Path) -> Path:
    path = tmp_path / "call_indices.toml"
    path.write_text(CALL_INDICES_TOML)
    return path
