from __future__ import annotations

import pytest

from ._utils import iter_source_files, matches_prefix, package_root, parse_imports

# layer -> packages it must not import
_FORBIDDEN = {
    "core": ("pubseq.output", "pubseq.platform", "pubseq.publish", "pubseq.cli"),
    "platform": ("pubseq.output", "pubseq.publish", "pubseq.cli"),
    "publish": ("pubseq.cli",),
    "output": ("pubseq.cli",),
}


@pytest.mark.parametrize("layer", sorted(_FORBIDDEN))
def test_layer_imports(layer: str) -> None:
    root = package_root()
    offenders: list[str] = []

    for file_path in iter_source_files(root / layer):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            for prefix in _FORBIDDEN[layer]:
                if matches_prefix(item.module, prefix):
                    offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)
