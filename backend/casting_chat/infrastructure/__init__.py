"""
INFRASTRUCTURE LAYER - Implementations of the domain ports

- persistence/ → Prisma repositories and unit of work
- memory/      → In-memory unit of work (tests, local runs)
- external/    → Prisma-backed collaborator adapters
- storage/     → Disk storage for attachments
"""
