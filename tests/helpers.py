"""Builders and fakes shared by the test modules."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import httpx

from zui.data.models.packages import to_named_address
from zui.errors import ToolchainError
from zui.integrations.sui_cli import SuiCli
from zui.integrations.sui_graphql import SuiGraphQLClient
from zui.publish.submitter import Submitter

# GraphQL responses

def address_owned(object_id: str, owner: str) -> Dict[str, Any]:
    return {
        "address": object_id,
        "owner": {"__typename": "AddressOwner", "owner": {"address": owner}},
    }

def parent_owned(object_id: str, parent: str) -> Dict[str, Any]:
    return {
        "address": object_id,
        "owner": {"__typename": "Parent", "parent": {"address": parent}},
    }

def shared(object_id: str) -> Dict[str, Any]:
    return {"address": object_id, "owner": {"__typename": "Shared"}}

def immutable(object_id: str) -> Dict[str, Any]:
    return {"address": object_id, "owner": {"__typename": "Immutable"}}

def page(nodes: List[Dict[str, Any]], has_next: bool, cursor: Optional[str]) -> Dict[str, Any]:
    return {
        "data": {
            "objects": {
                "nodes": nodes,
                "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
            }
        }
    }

def paginate(nodes: List[Dict[str, Any]], page_size: int) -> List[Dict[str, Any]]:
    """Split nodes into the page responses a server would send."""
    chunks = [nodes[i:i + page_size] for i in range(0, len(nodes), page_size)] or [[]]
    return [
        page(chunk, has_next=i < len(chunks) - 1, cursor=f"cursor-{i + 1}")
        for i, chunk in enumerate(chunks)
    ]

class GraphQLServer:
    """Serves canned responses in order and records every request body."""

    def __init__(self, responses: Iterable[Any]):
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if not self.responses:
            raise AssertionError("unexpected GraphQL request")
        response = self.responses.pop(0)
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    def client(self) -> SuiGraphQLClient:
        return SuiGraphQLClient(
            "https://graphql.test/graphql", transport=httpx.MockTransport(self)
        )

# Move packages

def write_move_toml(
    root: Path,
    name: str,
    local_deps: Iterable[str] = (),
    git_deps: Iterable[str] = ("Sui",),
    addresses: Optional[Dict[str, str]] = None,
    with_addresses: bool = True,
) -> Path:
    """Write a Move.toml under root/<lowercase name>/ and return the package dir."""
    package_dir = root / name.lower()
    package_dir.mkdir(parents=True, exist_ok=True)

    lines = [
        "[package]",
        f'name = "{name}"',
        'edition = "2024.beta"',
        "",
        "[dependencies]",
    ]
    for dep in git_deps:
        lines.append(
            f'{dep} = {{ git = "https://github.com/MystenLabs/sui.git", '
            f'subdir = "crates/sui-framework/packages/{dep.lower()}-framework", '
            f'rev = "framework/testnet" }}'
        )
    for dep in local_deps:
        lines.append(f'{dep} = {{ local = "../{dep.lower()}" }}')

    if with_addresses:
        values = {to_named_address(name): "0x0"}
        values.update({to_named_address(dep): "0x0" for dep in local_deps})
        values.update(addresses or {})
        lines += ["", "# named addresses", "[addresses]"]
        lines += [f'{key} = "{value}"' for key, value in values.items()]

    (package_dir / "Move.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return package_dir

# Toolchain and submitter fakes

class FakeSuiCli(SuiCli):
    """Records toolchain calls instead of running the sui binary."""

    def __init__(self, fail_build_for: Iterable[str] = (), fail_lock_for: Iterable[str] = ()):
        super().__init__("sui")
        self.calls: List[tuple] = []
        self.fail_build_for = set(fail_build_for)
        self.fail_lock_for = set(fail_lock_for)
        self.manifests_at_build: Dict[str, str] = {}

    def run(self, args: List[str], capture_output: bool = False) -> str:
        raise AssertionError(f"unexpected sui call: {args}")

    def build_bytecode(self, path: Path) -> Dict[str, List[str]]:
        package = Path(path).name
        self.calls.append(("build", package))
        self.manifests_at_build[package] = (Path(path) / "Move.toml").read_text()
        if package in self.fail_build_for:
            raise ToolchainError(["sui", "move", "build"], 1, "error[E01002]: unexpected token")
        return {"modules": [f"module-{package}"], "dependencies": ["0x1", "0x2"]}

    def active_env(self) -> str:
        return "testnet"

    def chain_identifier(self) -> str:
        return "4c78adac"

    def active_address(self) -> str:
        return "0xsender"

    def register_published(self, path, environment, chain_id, package_id, version=1) -> None:
        package = Path(path).name
        self.calls.append(("register", package, environment, chain_id, package_id))
        if package in self.fail_lock_for:
            raise ToolchainError(["sui", "move", "manage-package"], 1, "lock error")

def publish_response(
    package_id: str, status: str = "success", error: Optional[str] = None
) -> Dict[str, Any]:
    status_block = {"status": status}
    if error:
        status_block["error"] = error
    return {
        "digest": "5Hj3",
        "effects": {"status": status_block},
        "objectChanges": [
            {
                "type": "created",
                "objectType": "0x2::package::UpgradeCap",
                "objectId": "0xcap",
            },
            {"type": "published", "packageId": package_id, "modules": ["main"]},
        ],
    }

class FakeSubmitter(Submitter):
    """Returns canned publish responses keyed by package directory."""

    name = "fake"
    sender = "0xsender"

    def __init__(self, addresses: Optional[Dict[str, str]] = None, responses: Optional[Dict[str, Any]] = None):
        self.addresses = addresses or {}
        self.responses = responses or {}
        self.submitted: List[str] = []

    def submit(self, modules: List[str], dependencies: List[str]) -> Dict[str, Any]:
        package = modules[0].split("-", 1)[1]
        self.submitted.append(package)
        if package in self.responses:
            return self.responses[package]
        package_id = self.addresses.get(package, f"0x{len(self.submitted):064x}")
        return publish_response(package_id)
