# Database schema definitions

USERS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        handle TEXT UNIQUE NOT NULL,
        name TEXT,
        email TEXT UNIQUE,
        password_hash TEXT,
        bio TEXT,
        avatar_url TEXT,
        created_at TIMESTAMP NOT NULL
    )
'''

SESSIONS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS sessions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        token TEXT UNIQUE NOT NULL,
        created_at TIMESTAMP NOT NULL,
        expires_at TIMESTAMP NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

POSTS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        author_id INTEGER NOT NULL,
        body TEXT NOT NULL,
        image_data TEXT, -- JSON array of data:image URIs
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (author_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

POST_LIKES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS post_likes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        post_id INTEGER NOT NULL,
        user_id INTEGER NOT NULL,
        created_at TIMESTAMP NOT NULL,
        UNIQUE(post_id, user_id),
        FOREIGN KEY (post_id) REFERENCES posts (id) ON DELETE CASCADE,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

POST_REPLIES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS post_replies (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        post_id INTEGER NOT NULL,
        author_id INTEGER NOT NULL,
        body TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (post_id) REFERENCES posts (id) ON DELETE CASCADE,
        FOREIGN KEY (author_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

GROUPS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS "groups" (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        creator_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        location TEXT,
        description TEXT,
        website_url TEXT,
        icon_data TEXT,
        image_data TEXT, -- JSON array of data:image URIs
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (creator_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

GROUP_MEMBERS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS group_members (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        group_id INTEGER NOT NULL,
        user_id INTEGER NOT NULL,
        created_at TIMESTAMP NOT NULL,
        UNIQUE(group_id, user_id),
        FOREIGN KEY (group_id) REFERENCES "groups" (id) ON DELETE CASCADE,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

EVENTS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        creator_id INTEGER NOT NULL,
        group_id INTEGER,
        title TEXT NOT NULL,
        location TEXT,
        latitude REAL,
        longitude REAL,
        description TEXT,
        image_data TEXT, -- JSON array of data:image URIs
        rsvp_link TEXT,
        event_time TIMESTAMP NOT NULL,
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (creator_id) REFERENCES users (id) ON DELETE CASCADE,
        FOREIGN KEY (group_id) REFERENCES "groups" (id) ON DELETE SET NULL
    )
'''

EVENT_LIKES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS event_likes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        event_id INTEGER NOT NULL,
        user_id INTEGER NOT NULL,
        created_at TIMESTAMP NOT NULL,
        UNIQUE(event_id, user_id),
        FOREIGN KEY (event_id) REFERENCES events (id) ON DELETE CASCADE,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

EVENT_RSVPS_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS event_rsvps (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        event_id INTEGER NOT NULL,
        user_id INTEGER NOT NULL,
        created_at TIMESTAMP NOT NULL,
        UNIQUE(event_id, user_id),
        FOREIGN KEY (event_id) REFERENCES events (id) ON DELETE CASCADE,
        FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

EVENT_REPLIES_TABLE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS event_replies (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        event_id INTEGER NOT NULL,
        author_id INTEGER NOT NULL,
        body TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL,
        FOREIGN KEY (event_id) REFERENCES events (id) ON DELETE CASCADE,
        FOREIGN KEY (author_id) REFERENCES users (id) ON DELETE CASCADE
    )
'''

INDEX_SCHEMAS = [
    'CREATE INDEX IF NOT EXISTS idx_sessions_expires ON sessions (expires_at)',
    'CREATE INDEX IF NOT EXISTS idx_posts_created ON posts (created_at)',
    'CREATE INDEX IF NOT EXISTS idx_post_replies_post ON post_replies (post_id, created_at)',
    'CREATE INDEX IF NOT EXISTS idx_events_created ON events (created_at)',
    'CREATE INDEX IF NOT EXISTS idx_events_creator ON events (creator_id)',
    'CREATE INDEX IF NOT EXISTS idx_event_replies_event ON event_replies (event_id, created_at)',
    'CREATE INDEX IF NOT EXISTS idx_groups_created ON "groups" (created_at)',
]

# Creation order respects foreign keys
TABLE_SCHEMAS = [
    USERS_TABLE_SCHEMA,
    SESSIONS_TABLE_SCHEMA,
    POSTS_TABLE_SCHEMA,
    POST_LIKES_TABLE_SCHEMA,
    POST_REPLIES_TABLE_SCHEMA,
    GROUPS_TABLE_SCHEMA,
    GROUP_MEMBERS_TABLE_SCHEMA,
    EVENTS_TABLE_SCHEMA,
    EVENT_LIKES_TABLE_SCHEMA,
    EVENT_RSVPS_TABLE_SCHEMA,
    EVENT_REPLIES_TABLE_SCHEMA,
]
