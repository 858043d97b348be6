# dashboard -- FastAPI server + PostgreSQL data layer for the invoicing dashboard
#
# Modules:
#   app        -- FastAPI application with lifespan management
#   config_env -- settings read from the environment / .env
#   database   -- PostgreSQL / SQLite async engine, query_database()
#   models     -- SQLAlchemy ORM models (users, customers, invoices, revenue)
#   schemas    -- Pydantic form inputs and view models
#   data       -- dashboard data fetches
#   actions    -- invoice form handlers + login action
#   auth       -- credential sign-in and session guard
#   seed       -- fixture CSV -> database seeding
#   routes/    -- API endpoints (overview, invoices, customers, login)
