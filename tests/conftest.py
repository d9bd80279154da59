"""Test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

USERS_YAML = """\
paths:
  /users:
    get:
      responses:
        "200":
          content:
            application/json:
              schema:
                $ref: "../schemas/user.yaml#/components/schemas/User"
components:
  parameters:
    UserId:
      name: id
      in: path
      required: true
      schema:
        type: string
"""

PETS_YAML = """\
paths:
  /pets:
    get:
      responses:
        "200":
          content:
            application/json:
              schema:
                $ref: '../schemas/pet.yaml#/components/schemas/Pet'
"""

USER_SCHEMA_YAML = """\
components:
  schemas:
    User:
      type: object
      properties:
        pet:
          $ref: "pet.yaml#/components/schemas/Pet"
"""

PET_SCHEMA_YAML = """\
components:
  schemas:
    Pet:
      type: object
      properties:
        name:
          type: string
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_file():
    """Write a text file, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def api_tree(tmp_path, write_file, monkeypatch):
    """A small split OpenAPI source tree; the working directory is its root."""
    write_file(tmp_path / "paths" / "users.yaml", USERS_YAML)
    write_file(tmp_path / "paths" / "pets.yaml", PETS_YAML)
    write_file(tmp_path / "schemas" / "user.yaml", USER_SCHEMA_YAML)
    write_file(tmp_path / "schemas" / "pet.yaml", PET_SCHEMA_YAML)

    monkeypatch.chdir(tmp_path)
    return tmp_path
