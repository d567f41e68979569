"""Pytest configuration and fixtures for schemadoc tests."""

import pytest


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running tests"
    )


@pytest.fixture(scope="session")
def anyio_backend():
    """Set the async backend for anyio."""
    return "asyncio"


@pytest.fixture
def blog_sql():
    """Users/posts DDL with one inline and one table-level foreign key."""
    return """
    -- blog schema
    CREATE TABLE users (
        id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
        email text NOT NULL UNIQUE,
        created_at timestamp DEFAULT now()
    );

    CREATE TABLE posts (
        id serial PRIMARY KEY,
        user_id uuid NOT NULL,
        title varchar(200) NOT NULL,
        published boolean DEFAULT false,
        FOREIGN KEY (user_id) REFERENCES users(id)
    );

    CREATE TABLE comments (
        id serial PRIMARY KEY,
        post_id int REFERENCES posts(id),
        body text
    );
    """


@pytest.fixture
def blog_prisma():
    """Prisma schema whose foreign keys are only discoverable by naming."""
    return """
    datasource db {
      provider = "postgresql"
      url      = env("DATABASE_URL")
    }

    model User {
      id        String   @id @default(uuid()) @db.Uuid
      email     String   @unique
      name      String?
      createdAt DateTime @default(now())
      posts     Post[]
    }

    model Post {
      id       Int     @id @default(autoincrement())
      userId   String  @db.Uuid
      title    String
      meta     Json?
      author   User    @relation(fields: [userId], references: [id])

      @@index([userId])
    }
    """


@pytest.fixture
def blog_drizzle():
    """Drizzle pgTable definitions using snake_case foreign key names."""
    return """
    import { pgTable, uuid, text, timestamp, integer } from "drizzle-orm/pg-core";

    // users table
    export const users = pgTable("users", {
      id: uuid("id").primaryKey().defaultRandom(),
      email: text("email").notNull().unique(),
      createdAt: timestamp("created_at").defaultNow(),
    });

    export const posts = pgTable("posts", {
      id: integer("id").primaryKey(),
      user_id: uuid("user_id")
        .notNull(),
      age: integer("age"),
    }, (t) => ({
      userIdx: index("posts_user_idx").on(t.user_id),
    }));
    """
