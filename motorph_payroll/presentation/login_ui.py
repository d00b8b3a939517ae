# motorph_payroll/presentation/login_ui.py

from PyQt5.QtWidgets import (QDialog, QVBoxLayout, QFormLayout, QLabel, QLineEdit,
                             QPushButton, QMessageBox)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont

from typing import Optional

from motorph_payroll.business_logic.auth_manager import AuthManager
from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.config import APP_TITLE, COMPANY_NAME
import logging

logger = logging.getLogger(__name__)

MAX_LOGIN_ATTEMPTS = 3

class LoginDialog(QDialog):
    def __init__(self, auth_manager: AuthManager, parent=None):
        super().__init__(parent)
        self.auth_manager = auth_manager
        self.employee: Optional[EmployeeEntity] = None
        self.failed_attempts = 0

        self.setWindowTitle(f"{APP_TITLE} - Login")
        self.setFixedSize(550, 620)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(60, 60, 60, 60)

        title = QLabel(COMPANY_NAME)
        title.setFont(QFont("Arial", 28, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle = QLabel("Payroll System")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addStretch()

        form = QFormLayout()
        self.employee_id_edit = QLineEdit(self)
        self.employee_id_edit.setPlaceholderText("e.g. 10001")
        self.password_edit = QLineEdit(self)
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("Employee ID:", self.employee_id_edit)
        form.addRow("Password:", self.password_edit)
        layout.addLayout(form)

        self.login_button = QPushButton("Login")
        self.login_button.setDefault(True)
        self.login_button.clicked.connect(self._attempt_login)
        self.password_edit.returnPressed.connect(self._attempt_login)
        layout.addWidget(self.login_button)
        layout.addStretch()

    def _attempt_login(self):
        employee_id_text = self.employee_id_edit.text().strip()
        password = self.password_edit.text()

        if not self.auth_manager.is_valid_employee_id(employee_id_text):
            QMessageBox.warning(self, "Invalid Input", "Employee ID must be a positive number.")
            return
        if not password:
            QMessageBox.warning(self, "Invalid Input", "Please enter your password.")
            return

        try:
            employee = self.auth_manager.authenticate(employee_id_text, password)
        except Exception as e:
            logger.error(f"Error during login: {e}", exc_info=True)
            QMessageBox.critical(self, "Login Error", f"Could not log in: {e}")
            return

        if employee is None:
            self.failed_attempts += 1
            self.password_edit.clear()
            if self.failed_attempts >= MAX_LOGIN_ATTEMPTS:
                QMessageBox.critical(self, "Login Failed", "Too many failed attempts.")
                self.reject()
                return
            QMessageBox.warning(self, "Login Failed", "Invalid employee ID or password.")
            return

        self.employee = employee
        self.accept()
