"""Database schema expected by the application.

The backend is managed externally, so upgrades are applied by hand: when the
schema probe fails the UI (and `groomdesk sql`) shows these statements so they
can be pasted into the project's SQL editor. Every statement is idempotent.
"""

REQUIRED_SQL = """
-- Run in the SQL editor of the hosted project when tables or columns are missing

CREATE TABLE IF NOT EXISTS clients (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  name TEXT NOT NULL,
  phone TEXT,
  pet_name TEXT,
  notes TEXT,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT timezone('utc'::text, now())
);

-- Columns added after the first release
DO $$
BEGIN
    IF NOT EXISTS (SELECT 1 FROM information_schema.columns
                   WHERE table_name = 'clients' AND column_name = 'pet_name') THEN
        ALTER TABLE clients ADD COLUMN pet_name TEXT;
    END IF;
    IF NOT EXISTS (SELECT 1 FROM information_schema.columns
                   WHERE table_name = 'clients' AND column_name = 'notes') THEN
        ALTER TABLE clients ADD COLUMN notes TEXT;
    END IF;
END $$;

CREATE TABLE IF NOT EXISTS products (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  name TEXT NOT NULL,
  quantity INTEGER DEFAULT 0 CHECK (quantity >= 0),
  price DECIMAL(10,2) DEFAULT 0.00,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT timezone('utc'::text, now())
);

CREATE TABLE IF NOT EXISTS appointments (
  id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
  client_id UUID REFERENCES clients(id) ON DELETE SET NULL,
  client_name TEXT,
  pet_name TEXT,
  service TEXT,
  price DECIMAL(10,2),
  date TIMESTAMP WITH TIME ZONE,
  is_paid BOOLEAN DEFAULT FALSE,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT timezone('utc'::text, now())
);

ALTER TABLE clients ENABLE ROW LEVEL SECURITY;
ALTER TABLE products ENABLE ROW LEVEL SECURITY;
ALTER TABLE appointments ENABLE ROW LEVEL SECURITY;

-- Signed-in users get full access; anonymous requests see nothing
DROP POLICY IF EXISTS "authenticated full access on clients" ON clients;
CREATE POLICY "authenticated full access on clients" ON clients
  FOR ALL TO authenticated USING (true) WITH CHECK (true);

DROP POLICY IF EXISTS "authenticated full access on products" ON products;
CREATE POLICY "authenticated full access on products" ON products
  FOR ALL TO authenticated USING (true) WITH CHECK (true);

DROP POLICY IF EXISTS "authenticated full access on appointments" ON appointments;
CREATE POLICY "authenticated full access on appointments" ON appointments
  FOR ALL TO authenticated USING (true) WITH CHECK (true);
"""
