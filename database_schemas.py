# Database schema definitions

USERS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        nickname TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,
        avatar TEXT,
        created_at TIMESTAMP NOT NULL
    )
'''

PAPERS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS papers (
        id TEXT PRIMARY KEY,
        content TEXT NOT NULL,
        type TEXT NOT NULL CHECK (type IN ('text', 'image', 'audio', 'video')),
        media_url TEXT,
        author_id TEXT NOT NULL,
        latitude REAL NOT NULL CHECK (latitude BETWEEN -90 AND 90),
        longitude REAL NOT NULL CHECK (longitude BETWEEN -180 AND 180),
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (author_id) REFERENCES users (id)
    )
'''

COMMENTS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS comments (
        id TEXT PRIMARY KEY,
        paper_id TEXT NOT NULL,
        content TEXT NOT NULL,
        author_id TEXT NOT NULL,
        parent_id TEXT,
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (paper_id) REFERENCES papers (id),
        FOREIGN KEY (author_id) REFERENCES users (id),
        FOREIGN KEY (parent_id) REFERENCES comments (id)
    )
'''

MESSAGES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS messages (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        type TEXT NOT NULL CHECK (type IN ('comment', 'reply', 'like')),
        paper_id TEXT NOT NULL,
        comment_id TEXT,
        from_user_id TEXT NOT NULL,
        content TEXT NOT NULL,
        is_read BOOLEAN NOT NULL DEFAULT 0,
        created_at TIMESTAMP NOT NULL,
        CHECK (user_id != from_user_id),
        FOREIGN KEY (user_id) REFERENCES users (id),
        FOREIGN KEY (paper_id) REFERENCES papers (id),
        FOREIGN KEY (comment_id) REFERENCES comments (id),
        FOREIGN KEY (from_user_id) REFERENCES users (id)
    )
'''

LIKES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS likes (
        id TEXT PRIMARY KEY,
        paper_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL,
        UNIQUE(paper_id, user_id),
        FOREIGN KEY (paper_id) REFERENCES papers (id),
        FOREIGN KEY (user_id) REFERENCES users (id)
    )
'''

INDEX_SCHEMAS = [
    "CREATE INDEX IF NOT EXISTS idx_papers_author ON papers (author_id)",
    "CREATE INDEX IF NOT EXISTS idx_comments_paper ON comments (paper_id)",
    "CREATE INDEX IF NOT EXISTS idx_comments_author ON comments (author_id)",
    "CREATE INDEX IF NOT EXISTS idx_messages_user ON messages (user_id, is_read)",
]
