"""
Unit tests for config loader.
"""

from pathlib import Path

import pytest


@pytest.mark.unit
def test_load_config_missing_file(monkeypatch, temp_dir):
    monkeypatch.setenv("FSPROV_CONFIG_PATH", str(temp_dir / "missing.conf"))
    from fsprov.cli.lib.config import load_config

    cfg = load_config()
    assert cfg.fstab_path == Path("/etc/fstab")
    assert cfg.wait_interval == 0.3
    assert cfg.wait_attempts == 1000
    assert cfg.is_netfs("nfs4")
    assert not cfg.is_netfs("ext4")
    assert cfg.tool("xfs").packages == ("xfsprogs",)
    assert cfg.tool("xfs").forceopt == "-f"
    assert cfg.tool("ext4").forceopt == "-F"
    assert cfg.tool("zfs").packages == ()
    assert cfg.tool("zfs").forceopt is None
    assert cfg.package_manager is None


@pytest.mark.unit
def test_load_config_reads_values(monkeypatch, temp_dir):
    config_path = temp_dir / "fsprov.conf"
    config_path.write_text(
        "\n".join(
            [
                "[fsprov]",
                "fstab_path = /tmp/fstab",
                "wait_interval = 0.5",
                "wait_attempts = 20",
                "net_fs_types = nfs, glusterfs",
                "package_manager = dnf",
                "",
                "[tools:xfs]",
                "forceopt = -f -q",
                "",
                "[tools:f2fs]",
                "package = f2fs-tools, util-linux",
                "forceopt = -f",
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("FSPROV_CONFIG_PATH", str(config_path))
    from fsprov.cli.lib.config import load_config

    cfg = load_config()
    assert cfg.fstab_path == Path("/tmp/fstab")
    assert cfg.wait_interval == 0.5
    assert cfg.wait_attempts == 20
    assert cfg.net_fs_types == frozenset({"nfs", "glusterfs"})
    assert cfg.package_manager == "dnf"
    assert cfg.tool("xfs").packages == ("xfsprogs",)
    assert cfg.tool("xfs").forceopt == "-f -q"
    assert cfg.tool("f2fs").packages == ("f2fs-tools", "util-linux")
    assert cfg.tool("ext3").packages == ("e2fsprogs",)


@pytest.mark.unit
def test_load_config_explicit_path_and_bad_numbers(temp_dir):
    config_path = temp_dir / "other.conf"
    config_path.write_text("[fsprov]\nwait_attempts = many\nwait_interval = soon\n", encoding="utf-8")
    from fsprov.cli.lib.config import load_config

    cfg = load_config(config_path)
    assert cfg.wait_attempts == 1000
    assert cfg.wait_interval == 0.3
