# ============================================================================
# CATALOG QUERIES
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Read-only catalog SQL
# PURPOSE: The fixed set of queries the catalog repository issues
# CREATED: 19 OCT 2026
# ============================================================================
"""
Catalog Queries

Every query is a prebuilt psycopg sql.SQL object with named parameters.
Table-scoped queries take %(schema)s and %(table)s. Every query carries an
ORDER BY so the same catalog state always yields rows in the same order.
"""

from psycopg import sql

# ============================================================================
# SCHEMA-LEVEL OBJECTS
# ============================================================================

LIST_TABLES = sql.SQL("""
    SELECT table_schema, table_name
    FROM   information_schema.tables
    WHERE  table_schema::text <> ALL(%(excluded_schemas)s::text[])
    AND    (table_schema || '.' || table_name) <> ALL(%(excluded_relations)s::text[])
    AND    table_type = 'BASE TABLE'
    ORDER BY table_schema, table_name
""")

LIST_VIEWS = sql.SQL("""
    SELECT t.table_schema, t.table_name, v.definition
    FROM   information_schema.tables t
    JOIN   pg_views v ON v.schemaname = t.table_schema AND v.viewname = t.table_name
    WHERE  t.table_schema::text <> ALL(%(excluded_schemas)s::text[])
    AND    (t.table_schema || '.' || t.table_name) <> ALL(%(excluded_relations)s::text[])
    AND    t.table_type = 'VIEW'
    ORDER BY t.table_schema, t.table_name
""")

LIST_ENUM_TYPES = sql.SQL("""
    SELECT n.nspname AS type_schema,
           t.typname AS type_name,
           array_agg(e.enumlabel::text ORDER BY e.enumsortorder) AS labels
    FROM   pg_enum e
    JOIN   pg_type t ON t.oid = e.enumtypid
    JOIN   pg_namespace n ON n.oid = t.typnamespace
    GROUP BY n.nspname, t.typname
    ORDER BY n.nspname, t.typname
""")

SERVER_VERSION = sql.SQL("""
    SELECT setting
    FROM   pg_settings
    WHERE  name = 'server_version_num'
""")

# ============================================================================
# COLUMNS
# ============================================================================

# One row per column, plus one extra row per additional single-column check.
TABLE_COLUMNS = sql.SQL("""
    WITH
      columns AS (
        SELECT
          f.attnum,
          s.column_name,
          s.column_default,
          s.is_nullable,
          s.character_maximum_length,
          CASE
          WHEN s.data_type IN ('ARRAY', 'USER-DEFINED') THEN format_type(f.atttypid, f.atttypmod)
          ELSE s.data_type
          END AS data_type,
          s.identity_generation
        FROM pg_attribute f
        JOIN pg_class c ON c.oid = f.attrelid
        LEFT JOIN pg_namespace n ON n.oid = c.relnamespace
        LEFT JOIN information_schema.columns s
               ON s.column_name = f.attname
              AND s.table_name = c.relname
              AND s.table_schema = n.nspname
        WHERE c.relkind = 'r'
        AND   n.nspname = %(schema)s
        AND   c.relname = %(table)s
        AND   f.attnum > 0
        AND   NOT f.attisdropped
      ),
      column_checks AS (
        SELECT att.attname AS column_name, tmp.name, tmp.definition
        FROM (
          SELECT unnest(con.conkey) AS conkey,
                 pg_get_constraintdef(con.oid, true) AS definition,
                 cls.oid AS relid,
                 con.conname AS name
          FROM   pg_constraint con
          JOIN   pg_namespace nsp ON nsp.oid = con.connamespace
          JOIN   pg_class cls ON cls.oid = con.conrelid
          WHERE  nsp.nspname = %(schema)s
          AND    cls.relname = %(table)s
          AND    con.contype = 'c'
          AND    array_length(con.conkey, 1) = 1
        ) tmp
        JOIN pg_attribute att ON tmp.conkey = att.attnum AND tmp.relid = att.attrelid
      )
    SELECT columns.column_name,
           columns.column_default,
           columns.is_nullable,
           columns.character_maximum_length,
           columns.data_type,
           columns.identity_generation,
           checks.name AS check_name,
           checks.definition AS check_definition
    FROM      columns
    LEFT JOIN column_checks checks USING (column_name)
    ORDER BY  columns.attnum, checks.name
""")

PRIMARY_KEY_COLUMNS = sql.SQL("""
    SELECT kcu.column_name
    FROM   information_schema.table_constraints AS tc
    JOIN   information_schema.key_column_usage AS kcu
           USING (table_schema, table_name, constraint_name)
    WHERE  tc.constraint_type = 'PRIMARY KEY'
    AND    tc.table_schema = %(schema)s
    AND    tc.table_name = %(table)s
    ORDER BY kcu.ordinal_position
""")

# ============================================================================
# CONSTRAINTS & INDEXES
# ============================================================================

# Names of constraints of the given kinds; PK/UNIQUE indexes share these names.
CONSTRAINT_NAMES = sql.SQL("""
    SELECT con.conname
    FROM   pg_constraint con
    JOIN   pg_namespace nsp ON nsp.oid = con.connamespace
    JOIN   pg_class cls ON cls.oid = con.conrelid
    WHERE  con.contype::text = ANY(%(contypes)s::text[])
    AND    nsp.nspname = %(schema)s
    AND    cls.relname = %(table)s
    ORDER BY con.conname
""")

TABLE_INDEXES = sql.SQL("""
    SELECT indexname, indexdef
    FROM   pg_indexes
    WHERE  schemaname = %(schema)s
    AND    tablename = %(table)s
    ORDER BY indexname
""")

MULTI_COLUMN_CHECKS = sql.SQL("""
    SELECT con.conname, pg_get_constraintdef(con.oid, true) AS definition
    FROM   pg_constraint con
    JOIN   pg_namespace nsp ON nsp.oid = con.connamespace
    JOIN   pg_class cls ON cls.oid = con.conrelid
    WHERE  con.contype = 'c'
    AND    nsp.nspname = %(schema)s
    AND    cls.relname = %(table)s
    AND    array_length(con.conkey, 1) > 1
    ORDER BY con.conname
""")

UNIQUE_CONSTRAINTS = sql.SQL("""
    SELECT con.conname, pg_get_constraintdef(con.oid) AS definition
    FROM   pg_constraint con
    JOIN   pg_namespace nsp ON nsp.oid = con.connamespace
    JOIN   pg_class cls ON cls.oid = con.conrelid
    WHERE  con.contype = 'u'
    AND    nsp.nspname = %(schema)s
    AND    cls.relname = %(table)s
    ORDER BY con.conname
""")

# One row per key column; conkey/confkey are unnested together so composite
# keys keep their column pairing.
FOREIGN_KEYS = sql.SQL("""
    SELECT nsp.nspname   AS table_schema,
           con.conname   AS constraint_name,
           cls.relname   AS table_name,
           att.attname   AS column_name,
           fnsp.nspname  AS foreign_table_schema,
           fcls.relname  AS foreign_table_name,
           fatt.attname  AS foreign_column_name,
           con.confupdtype::text AS update_rule,
           con.confdeltype::text AS delete_rule
    FROM   pg_constraint con
    JOIN   pg_namespace nsp ON nsp.oid = con.connamespace
    JOIN   pg_class cls ON cls.oid = con.conrelid
    JOIN   pg_class fcls ON fcls.oid = con.confrelid
    JOIN   pg_namespace fnsp ON fnsp.oid = fcls.relnamespace
    CROSS JOIN LATERAL unnest(con.conkey, con.confkey)
           WITH ORDINALITY AS k(attnum, fattnum, position)
    JOIN   pg_attribute att ON att.attrelid = con.conrelid AND att.attnum = k.attnum
    JOIN   pg_attribute fatt ON fatt.attrelid = con.confrelid AND fatt.attnum = k.fattnum
    WHERE  con.contype = 'f'
    AND    nsp.nspname = %(schema)s
    AND    cls.relname = %(table)s
    ORDER BY con.conname, k.position
""")

# ============================================================================
# POLICIES
# ============================================================================

# pg_policies.permissive exists from PostgreSQL 10 on.
POLICIES_WITH_PERMISSIVE = sql.SQL("""
    SELECT policyname, permissive, roles::text AS roles, cmd, qual, with_check
    FROM   pg_policies
    WHERE  schemaname = %(schema)s
    AND    tablename = %(table)s
    ORDER BY policyname
""")

POLICIES_WITHOUT_PERMISSIVE = sql.SQL("""
    SELECT policyname, ''::text AS permissive, roles::text AS roles, cmd, qual, with_check
    FROM   pg_policies
    WHERE  schemaname = %(schema)s
    AND    tablename = %(table)s
    ORDER BY policyname
""")
