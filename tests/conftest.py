"""Shared pytest fixtures for prisma-ls tests."""

from pathlib import Path

import pytest

from prisma_ls.core.lines import convert_document_text_to_trimmed_line_array

SCHEMA = """\
datasource db {
  provider = "postgresql"
  url      = env("DATABASE_URL")
}

generator client {
  provider        = "prisma-client-js"
  previewFeatures = ["fullTextSearch", "Views"]
}

model User {
  id      Int      @id @default(autoincrement())
  email   String   @unique
  // primary address
  address Address
  posts   Post[]

  @@map("users")
}

model Post {
  id       Int  @id
  authorId Int
  author   User @relation(fields: [authorId], references: [id])
}

type Address {
  street String
  geo    Geo
  owner  User
}

type Geo {
  lat Float
  lng Float
}

enum Role {
  USER
  ADMIN
}
"""


@pytest.fixture
def schema_text() -> str:
    """Return a schema with one of each block kind except view."""
    return SCHEMA


@pytest.fixture
def schema_lines(schema_text: str) -> list[str]:
    """Return the trimmed lines of the sample schema."""
    return convert_document_text_to_trimmed_line_array(schema_text)


@pytest.fixture
def user_address_lines() -> list[str]:
    """Return the minimal User/Address schema."""
    return [
        "model User {",
        "  name String",
        "  address Address",
        "}",
        "type Address {",
        "  city String",
        "}",
    ]


@pytest.fixture
def schema_file(tmp_path: Path, schema_text: str) -> Path:
    """Write the sample schema to a temporary file."""
    path = tmp_path / "schema.prisma"
    path.write_text(schema_text, encoding="utf-8")
    return path
