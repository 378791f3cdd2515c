"""SQLite index and markdown file storage."""