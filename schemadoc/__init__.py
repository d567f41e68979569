"""schemadoc: schema parsing, conversion and diffing for SQL, Prisma and Drizzle."""

__version__ = "0.1.0"
