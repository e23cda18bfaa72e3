import importlib.util
import sys
import types
import uuid
from pathlib import Path


def _find_server_py() -> Path:
    root = Path(__file__).resolve().parents[2]
    candidates = [
        root / "server.py",
        root / "server" / "server.py",
        root / "src" / "server" / "server.py",
    ]
    for p in candidates:
        if p.exists():
            return p
    raise FileNotFoundError(f"Could not find server.py. Tried: {candidates}")


def _install_fake_modules(monkeypatch, captures: dict):
    # ---- Fake mcp.server.fastmcp.FastMCP ----
    mcp_mod = types.ModuleType("mcp")
    mcp_server_mod = types.ModuleType("mcp.server")
    fastmcp_mod = types.ModuleType("mcp.server.fastmcp")

    class DummyFastMCP:
        def __init__(self, name: str):
            captures["fastmcp_name"] = name
            captures["mcp_instance"] = self
            self.run_calls = []

        def run(self, *, transport: str):
            self.run_calls.append({"transport": transport})
            captures["run_calls"] = list(self.run_calls)

    fastmcp_mod.FastMCP = DummyFastMCP
    mcp_mod.__path__ = []
    mcp_server_mod.__path__ = []

    monkeypatch.setitem(sys.modules, "mcp", mcp_mod)
    monkeypatch.setitem(sys.modules, "mcp.server", mcp_server_mod)
    monkeypatch.setitem(sys.modules, "mcp.server.fastmcp", fastmcp_mod)

    # ---- Fake config ----
    config_mod = types.ModuleType("config")
    config_mod.CACHE_SERVER_NAME = "cache-under-test"
    config_mod.CACHE_LOG_LEVEL = "DEBUG"
    config_mod.load_cache_config = lambda: "CONFIG"
    monkeypatch.setitem(sys.modules, "config", config_mod)

    # ---- Fake cache ----
    core_pkg = types.ModuleType("core")
    core_pkg.__path__ = []
    cache_mod = types.ModuleType("core.cache")

    class FakeLRUCache:
        closed = 0

        @classmethod
        def from_config(cls, config):
            captures["cache_configs"] = captures.get("cache_configs", []) + [config]
            inst = cls()
            captures["cache_instance"] = inst
            return inst

        def close(self):
            captures["cache_closed"] = captures.get("cache_closed", 0) + 1

    cache_mod.LRUCache = FakeLRUCache
    monkeypatch.setitem(sys.modules, "core", core_pkg)
    monkeypatch.setitem(sys.modules, "core.cache", cache_mod)

    # ---- Fake tools ----
    tools_pkg = types.ModuleType("tools")
    tools_pkg.__path__ = []
    tools_mod = types.ModuleType("tools.cache_tools")

    def register_cache_tools(mcp, *, cache):
        captures["register_calls"] = captures.get("register_calls", []) + [{"mcp": mcp, "cache": cache}]

    tools_mod.register = register_cache_tools
    monkeypatch.setitem(sys.modules, "tools", tools_pkg)
    monkeypatch.setitem(sys.modules, "tools.cache_tools", tools_mod)


def _load_server_module(monkeypatch, captures: dict):
    _install_fake_modules(monkeypatch, captures)

    server_path = _find_server_py()
    mod_name = f"server_under_test_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(mod_name, server_path)
    assert spec and spec.loader

    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, mod_name, module)
    spec.loader.exec_module(module)
    return module


def test_server_builds_one_cache_and_registers_tools(monkeypatch):
    captures = {}
    module = _load_server_module(monkeypatch, captures)
    monkeypatch.setattr(module.logging, "basicConfig", lambda **kwargs: captures.setdefault("log", kwargs))

    assert captures["fastmcp_name"] == "cache-under-test"
    assert captures["cache_configs"] == ["CONFIG"]

    calls = captures["register_calls"]
    assert len(calls) == 1
    assert calls[0]["mcp"] is captures["mcp_instance"]
    assert calls[0]["cache"] is captures["cache_instance"]

    module.main()
    assert captures["run_calls"] == [{"transport": "stdio"}]
    assert captures["cache_closed"] == 1
    assert captures["log"]["level"] == "DEBUG"
