# motorph_payroll/data_access/database_manager.py

import os
import sqlite3
import logging
from motorph_payroll.config import DATABASE_PATH
from motorph_payroll.constants import EmploymentStatus, LeaveStatus

logger = logging.getLogger(__name__)

class DatabaseManager:
    def __init__(self, db_path=DATABASE_PATH):
        self.db_path = db_path
        self.conn = None

    def __enter__(self):
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row # Access columns by name
            self.conn.execute("PRAGMA foreign_keys = ON;") # Enforce foreign key constraints
            logger.debug(f"Database connection established to {self.db_path}")
            return self.conn
        except sqlite3.Error as e:
            logger.error(f"Error connecting to database {self.db_path}: {e}")
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Database connection closed.")

    def execute_query(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                conn.commit()
                return cursor
        except sqlite3.Error as e:
            logger.error(f"Query execution failed: {query} with params {params} - {e}")
            raise

    def fetch_one(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {query} with params {params} - {e}")
            raise

    def fetch_all(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Fetch all failed: {query} with params {params} - {e}")
            raise

    def create_tables(self):
        statuses = ', '.join(f"'{s.value}'" for s in EmploymentStatus)
        leave_statuses = ', '.join(f"'{s.value}'" for s in LeaveStatus)
        queries = [
            f"""
            CREATE TABLE IF NOT EXISTS employees (
                id INTEGER PRIMARY KEY, -- employee number assigned by HR, e.g. 10001
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                status TEXT NOT NULL CHECK(status IN ({statuses})),
                basic_salary REAL NOT NULL DEFAULT 0.0 CHECK(basic_salary >= 0),
                position TEXT,
                rice_subsidy REAL,
                phone_allowance REAL,
                clothing_allowance REAL,
                bonus_eligible INTEGER NOT NULL DEFAULT 1,
                birthday TEXT,
                address TEXT,
                phone_number TEXT,
                sss_number TEXT,
                philhealth_number TEXT,
                tin_number TEXT,
                pagibig_number TEXT,
                immediate_supervisor TEXT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS attendance (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                log_date TEXT NOT NULL, -- ISO Date
                log_in TEXT,            -- HH:MM:SS, NULL when absent
                log_out TEXT,           -- HH:MM:SS, NULL when not yet logged out
                FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS overtime (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                ot_date TEXT NOT NULL,
                hours REAL NOT NULL CHECK(hours >= 0),
                is_approved INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
            );
            """,
            f"""
            CREATE TABLE IF NOT EXISTS leave_requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                start_date TEXT NOT NULL,
                end_date TEXT NOT NULL,
                status TEXT NOT NULL CHECK(status IN ({leave_statuses})),
                is_paid INTEGER NOT NULL DEFAULT 1,
                leave_type TEXT,
                FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS payrolls (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL,
                period_start TEXT NOT NULL,
                period_end TEXT NOT NULL,
                days_worked INTEGER NOT NULL DEFAULT 0,
                leave_days INTEGER NOT NULL DEFAULT 0,
                payable_days INTEGER NOT NULL DEFAULT 0,
                total_work_hours REAL NOT NULL DEFAULT 0,
                late_minutes REAL NOT NULL DEFAULT 0,
                undertime_minutes REAL NOT NULL DEFAULT 0,
                total_overtime_hours REAL NOT NULL DEFAULT 0,
                monthly_rate REAL NOT NULL DEFAULT 0,
                gross_earnings REAL NOT NULL DEFAULT 0,
                overtime_pay REAL NOT NULL DEFAULT 0,
                rice_subsidy REAL NOT NULL DEFAULT 0,
                phone_allowance REAL NOT NULL DEFAULT 0,
                clothing_allowance REAL NOT NULL DEFAULT 0,
                sss REAL NOT NULL DEFAULT 0,
                philhealth REAL NOT NULL DEFAULT 0,
                pagibig REAL NOT NULL DEFAULT 0,
                withholding_tax REAL NOT NULL DEFAULT 0,
                rate_schedule TEXT,
                created_at TEXT,
                FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE RESTRICT
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS user_credentials (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                employee_id INTEGER NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                last_login TEXT,
                FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
            );
            """,
            "CREATE INDEX IF NOT EXISTS idx_attendance_employee_date ON attendance (employee_id, log_date);",
            "CREATE INDEX IF NOT EXISTS idx_overtime_employee_date ON overtime (employee_id, ot_date);",
            "CREATE INDEX IF NOT EXISTS idx_leave_employee_dates ON leave_requests (employee_id, start_date, end_date);",
        ]

        db_dir = os.path.dirname(os.path.abspath(self.db_path))
        if not os.path.exists(db_dir):
            os.makedirs(db_dir)

        with self as conn:
            try:
                for query in queries:
                    conn.execute(query)
                conn.commit()
                logger.info(f"Database schema checked/created at {self.db_path}.")
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error creating tables: {e}", exc_info=True)
                raise
