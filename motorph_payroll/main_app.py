# motorph_payroll/main_app.py
import sys
import logging
import logging.config
from PyQt5.QtWidgets import QApplication, QMainWindow, QTabWidget, QMessageBox, QDialog
from PyQt5.QtCore import QLocale

# --- Configuration and Constants ---
from motorph_payroll.config import DATABASE_PATH, LOGGING_CONFIG, APP_TITLE, ensure_app_dirs

# --- Data Access Layer (DAL) ---
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.data_access.employees_repository import EmployeesRepository
from motorph_payroll.data_access.attendance_repository import AttendanceRepository
from motorph_payroll.data_access.overtime_repository import OvertimeRepository
from motorph_payroll.data_access.leave_requests_repository import LeaveRequestsRepository
from motorph_payroll.data_access.payrolls_repository import PayrollsRepository
from motorph_payroll.data_access.credentials_repository import CredentialsRepository

# --- Business Logic Layer (BLL) ---
from motorph_payroll.business_logic.employee_manager import EmployeeManager
from motorph_payroll.business_logic.payroll_calculator import PayrollCalculator
from motorph_payroll.business_logic.payroll_manager import PayrollManager
from motorph_payroll.business_logic.auth_manager import AuthManager
from motorph_payroll.business_logic.report_manager import ReportManager
from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity

# --- Presentation Layer (UI Tabs) ---
from motorph_payroll.presentation.login_ui import LoginDialog
from motorph_payroll.presentation.employees_ui import EmployeesUI
from motorph_payroll.presentation.payroll_ui import PayrollUI

logger = logging.getLogger(__name__)


def setup_logging():
    ensure_app_dirs()
    logging.config.dictConfig(LOGGING_CONFIG)


class AppContext:
    """Repositories and managers shared by the login dialog and the main window."""
    def __init__(self, db_path: str = DATABASE_PATH):
        logger.info("Initializing Database Manager and creating tables...")
        self.db_manager = DatabaseManager(db_path)
        self.db_manager.create_tables()

        logger.info("Initializing Repositories...")
        self.employees_repo = EmployeesRepository(self.db_manager)
        self.attendance_repo = AttendanceRepository(self.db_manager)
        self.overtime_repo = OvertimeRepository(self.db_manager)
        self.leave_repo = LeaveRequestsRepository(self.db_manager)
        self.payrolls_repo = PayrollsRepository(self.db_manager)
        self.credentials_repo = CredentialsRepository(self.db_manager)

        logger.info("Initializing Managers...")
        self.employee_manager = EmployeeManager(self.employees_repo)
        self.payroll_calculator = PayrollCalculator(
            employees_repository=self.employees_repo,
            attendance_repository=self.attendance_repo,
            overtime_repository=self.overtime_repo,
            leave_repository=self.leave_repo
        )
        self.payroll_manager = PayrollManager(
            payrolls_repository=self.payrolls_repo,
            payroll_calculator=self.payroll_calculator,
            employee_manager=self.employee_manager
        )
        self.auth_manager = AuthManager(self.employees_repo, self.credentials_repo)
        self.report_manager = ReportManager()


class MainWindow(QMainWindow):
    def __init__(self, context: AppContext, employee: EmployeeEntity, parent=None):
        super().__init__(parent)
        self.context = context
        self.employee = employee
        self.is_hr = context.auth_manager.is_hr_role(employee.position)

        self.setWindowTitle(f"{APP_TITLE} - {employee.full_name}")
        self.setGeometry(100, 100, 1100, 720)

        logger.info(f"Setting up UI for employee {employee.id} (HR view: {self.is_hr})...")
        self._setup_ui()
        logger.info("MainWindow initialized and UI setup complete.")

    def _setup_ui(self):
        self.tabs = QTabWidget()

        self.employees_tab = EmployeesUI(self.context.employee_manager, read_only=not self.is_hr, parent=self)
        if self.is_hr:
            self.tabs.addTab(self.employees_tab, "Employees")

        self.payroll_tab = PayrollUI(
            payroll_manager=self.context.payroll_manager,
            employee_manager=self.context.employee_manager,
            report_manager=self.context.report_manager,
            current_employee=self.employee,
            is_hr=self.is_hr,
            parent=self
        )
        self.tabs.addTab(self.payroll_tab, "Payroll")

        self.setCentralWidget(self.tabs)


def main():
    setup_logging()
    logger.info("Application starting...")
    app = QApplication(sys.argv)
    QLocale.setDefault(QLocale(QLocale.Language.English, QLocale.Country.Philippines))

    try:
        context = AppContext()
    except Exception as e:
        logger.error(f"FATAL: Could not initialize database: {e}", exc_info=True)
        QMessageBox.critical(None, "Database Error", f"Could not create or open the database: {e}")
        sys.exit(1)

    login = LoginDialog(context.auth_manager)
    if login.exec_() != QDialog.DialogCode.Accepted or login.employee is None:
        logger.info("Login cancelled; exiting.")
        sys.exit(0)

    main_window = MainWindow(context, login.employee)
    main_window.show()
    logger.info("Application started successfully. Main window shown.")
    sys.exit(app.exec_())

if __name__ == '__main__':
    main()
