"""
Pytest fixtures for mcp-generator tests.
"""

import json
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add project root to path for mcpgen imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer environment variables out of test runs."""
    monkeypatch.delenv("MCPGEN_DEBUG", raising=False)
    monkeypatch.delenv("MCPGEN_LOG_FILE", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


def _write_file(root: Path, rel_path: str, content: str) -> Path:
    """Write a file under root, creating parent directories."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def project_file(temp_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing files relative to temp_dir."""

    def _make(rel_path: str, content: str) -> Path:
        return _write_file(temp_dir, rel_path, content)

    return _make


@pytest.fixture
def sample_service_file(temp_dir: Path) -> Path:
    """Create a sample TypeScript service file."""
    return _write_file(temp_dir, "src/services/userService.ts", '''
import { User } from "./models";

/**
 * Look up a user record.
 * @example getUserById("42")
 */
export async function getUserById(id: string): Promise<User> {
    return db.users.find(id);
}

export const createUser = async (name: string, role?: "admin" | "member"): Promise<User> => {
    return db.users.insert({ name, role });
};

function _internalHelper() {}

export function testFixture() {}
''')


@pytest.fixture
def sample_schema_file(temp_dir: Path) -> Path:
    """Create a sample MySQL schema file."""
    return _write_file(temp_dir, "db/schema.sql", '''
CREATE TABLE users (
    id INT NOT NULL AUTO_INCREMENT,
    email VARCHAR(255) NOT NULL,
    nickname VARCHAR(64),
    PRIMARY KEY (id)
);

CREATE TABLE orders (
    id INT NOT NULL AUTO_INCREMENT PRIMARY KEY,
    user_id INT NOT NULL,
    total DECIMAL(10, 2) DEFAULT 0,
    FOREIGN KEY (user_id) REFERENCES users(id)
);
''')


@pytest.fixture
def sample_project(temp_dir: Path, sample_service_file: Path, sample_schema_file: Path) -> Path:
    """Create a small project with package.json, sources and SQL."""
    _write_file(temp_dir, "package.json", json.dumps({
        "name": "shop-api",
        "version": "2.1.0",
        "description": "Shop backend",
        "dependencies": {"express": "^4.18.0"},
        "devDependencies": {"typescript": "^5.0.0"},
        "scripts": {"build": "tsc"},
    }))
    _write_file(temp_dir, "src/api/orders.ts", '''
export function listOrders(limit: number = 20): Order[] {
    return [];
}
''')
    _write_file(temp_dir, "src/api/orders.test.ts", '''
export function getOrdersFixture() {}
''')
    _write_file(temp_dir, "node_modules/lib/index.ts", '''
export function getVendored() {}
''')
    _write_file(temp_dir, "db/migrations/001_init.sql", "CREATE TABLE legacy (id INT);")
    return temp_dir
