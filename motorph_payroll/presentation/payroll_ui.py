# motorph_payroll/presentation/payroll_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QDateEdit,
                             QPushButton, QTableWidget, QTableWidgetItem, QHeaderView, QMessageBox,
                             QAbstractItemView, QTextEdit, QSplitter, QGroupBox, QFormLayout)
from PyQt5.QtCore import Qt, QDate
from PyQt5.QtGui import QFont

from typing import List, Optional, Tuple
from decimal import Decimal

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.employee_manager import EmployeeManager
from motorph_payroll.business_logic.payroll_manager import PayrollManager
from motorph_payroll.business_logic.report_manager import ReportManager
from motorph_payroll.exceptions import ValidationError, NotFoundError
from motorph_payroll.utils.date_converter import from_qdate
from motorph_payroll.utils.money import format_peso
import logging

logger = logging.getLogger(__name__)


def payroll_breakdown_rows(payroll: PayrollEntity) -> List[Tuple[str, str]]:
    return [
        ("Days worked", str(payroll.days_worked)),
        ("Paid leave days", str(payroll.leave_days)),
        ("Hours worked", f"{payroll.total_work_hours:.2f}"),
        ("Overtime hours", f"{payroll.total_overtime_hours:.2f}"),
        ("Late (minutes)", f"{payroll.late_minutes:.0f}"),
        ("Undertime (minutes)", f"{payroll.undertime_minutes:.0f}"),
        ("Monthly rate", format_peso(payroll.monthly_rate)),
        ("Basic pay", format_peso(payroll.gross_earnings)),
        ("Overtime pay", format_peso(payroll.overtime_pay)),
        ("Rice subsidy", format_peso(payroll.rice_subsidy)),
        ("Phone allowance", format_peso(payroll.phone_allowance)),
        ("Clothing allowance", format_peso(payroll.clothing_allowance)),
        ("Gross pay", format_peso(payroll.gross_pay)),
        ("SSS", format_peso(payroll.sss)),
        ("PhilHealth", format_peso(payroll.philhealth)),
        ("Pag-IBIG", format_peso(payroll.pagibig)),
        ("Withholding tax", format_peso(payroll.withholding_tax)),
        ("Total deductions", format_peso(payroll.total_deductions)),
        ("Net pay", format_peso(payroll.net_pay)),
    ]


class PayrollUI(QWidget):
    """
    Pay-period calculation tab. HR users pick any employee; everyone else only sees
    their own pay (current_employee).
    """
    def __init__(self,
                 payroll_manager: PayrollManager,
                 employee_manager: EmployeeManager,
                 report_manager: ReportManager,
                 current_employee: Optional[EmployeeEntity] = None,
                 is_hr: bool = True,
                 parent=None):
        super().__init__(parent)
        self.payroll_manager = payroll_manager
        self.employee_manager = employee_manager
        self.report_manager = report_manager
        self.current_employee = current_employee
        self.is_hr = is_hr
        self.current_payroll: Optional[PayrollEntity] = None
        self._init_ui()
        self.load_employees()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)

        criteria_box = QGroupBox("Pay Period")
        criteria_layout = QFormLayout(criteria_box)
        self.employee_combo = QComboBox(self)
        self.employee_combo.setEnabled(self.is_hr)

        today = QDate.currentDate()
        self.start_date_edit = QDateEdit(QDate(today.year(), today.month(), 1), self)
        self.end_date_edit = QDateEdit(QDate(today.year(), today.month(), today.daysInMonth()), self)
        for date_edit in (self.start_date_edit, self.end_date_edit):
            date_edit.setCalendarPopup(True)
            date_edit.setDisplayFormat("yyyy-MM-dd")

        criteria_layout.addRow("Employee:", self.employee_combo)
        criteria_layout.addRow("From:", self.start_date_edit)
        criteria_layout.addRow("To:", self.end_date_edit)

        button_layout = QHBoxLayout()
        self.calculate_button = QPushButton("Calculate")
        self.save_button = QPushButton("Save Payroll")
        self.save_button.setEnabled(False)
        self.history_button = QPushButton("Show Saved Payrolls")
        self.calculate_button.clicked.connect(self._calculate)
        self.save_button.clicked.connect(self._save)
        self.history_button.clicked.connect(self._show_history)
        button_layout.addWidget(self.calculate_button)
        if self.is_hr:
            button_layout.addWidget(self.save_button)
        button_layout.addWidget(self.history_button)
        button_layout.addStretch()
        criteria_layout.addRow(button_layout)
        main_layout.addWidget(criteria_box)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.breakdown_table = QTableWidget(0, 2)
        self.breakdown_table.setHorizontalHeaderLabels(["Item", "Amount"])
        self.breakdown_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.breakdown_table.verticalHeader().setVisible(False)
        header = self.breakdown_table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        splitter.addWidget(self.breakdown_table)

        self.payslip_view = QTextEdit(self)
        self.payslip_view.setReadOnly(True)
        self.payslip_view.setFont(QFont("Courier New", 10))
        splitter.addWidget(self.payslip_view)
        main_layout.addWidget(splitter)

        self.status_label = QLabel("")
        main_layout.addWidget(self.status_label)
        self.setLayout(main_layout)
        logger.info("PayrollUI initialized.")

    def load_employees(self):
        self.employee_combo.clear()
        try:
            if self.is_hr:
                employees = self.employee_manager.get_all_employees(include_terminated=False)
            else:
                employees = [self.current_employee] if self.current_employee else []
            for employee in employees:
                self.employee_combo.addItem(f"{employee.id} - {employee.full_name}", employee.id)
            if self.current_employee is not None:
                index = self.employee_combo.findData(self.current_employee.id)
                if index >= 0:
                    self.employee_combo.setCurrentIndex(index)
        except Exception as e:
            logger.error(f"Error loading employees for payroll: {e}", exc_info=True)
            QMessageBox.critical(self, "Load Error", f"Could not load employees: {e}")

    def _selected_request(self):
        employee_id = self.employee_combo.currentData()
        if employee_id is None:
            QMessageBox.information(self, "No Employee", "Please select an employee.")
            return None
        return employee_id, from_qdate(self.start_date_edit.date()), from_qdate(self.end_date_edit.date())

    def _show_payroll(self, payroll: PayrollEntity):
        rows = payroll_breakdown_rows(payroll)
        self.breakdown_table.setRowCount(len(rows))
        for row, (label, value) in enumerate(rows):
            self.breakdown_table.setItem(row, 0, QTableWidgetItem(label))
            amount_item = QTableWidgetItem(value)
            amount_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.breakdown_table.setItem(row, 1, amount_item)
        employee = self.employee_manager.get_employee(payroll.employee_id)
        self.payslip_view.setPlainText(self.report_manager.payslip_text(payroll, employee))
        if payroll.net_pay < Decimal("0"):
            self.status_label.setText("Warning: deductions exceed gross pay for this period.")
        else:
            self.status_label.setText(f"Rates used: {payroll.rate_schedule}")

    def _calculate(self):
        request = self._selected_request()
        if request is None:
            return
        try:
            self.current_payroll = self.payroll_manager.preview_payroll(*request)
            self._show_payroll(self.current_payroll)
            self.save_button.setEnabled(True)
        except (ValidationError, NotFoundError) as e:
            self.save_button.setEnabled(False)
            QMessageBox.warning(self, "Cannot Calculate", e.message)
        except Exception as e:
            self.save_button.setEnabled(False)
            logger.error(f"Error calculating payroll: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Payroll calculation failed: {e}")

    def _save(self):
        request = self._selected_request()
        if request is None:
            return
        try:
            saved = self.payroll_manager.generate_payroll_for_employee(*request)
        except ValidationError as e:
            reply = QMessageBox.question(self, "Payroll Exists", f"{e.message}\nReplace it?",
                                         QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No, # type: ignore
                                         QMessageBox.StandardButton.No)
            if reply != QMessageBox.StandardButton.Yes:
                return
            try:
                saved = self.payroll_manager.generate_payroll_for_employee(*request, replace_existing=True)
            except Exception as inner:
                logger.error(f"Error replacing payroll: {inner}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not save payroll: {inner}")
                return
        except Exception as e:
            logger.error(f"Error saving payroll: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not save payroll: {e}")
            return
        self._show_payroll(saved)
        QMessageBox.information(self, "Saved", f"Payroll #{saved.id} saved. Net pay {format_peso(saved.net_pay)}.")

    def _show_history(self):
        employee_id = self.employee_combo.currentData()
        if employee_id is None:
            return
        try:
            payrolls = self.payroll_manager.get_payrolls_for_employee(employee_id)
        except Exception as e:
            logger.error(f"Error loading saved payrolls: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load saved payrolls: {e}")
            return
        if not payrolls:
            QMessageBox.information(self, "Saved Payrolls", "No saved payrolls for this employee.")
            return
        lines = [f"#{p.id}  {p.period_start} to {p.period_end}  net {format_peso(p.net_pay)}" for p in payrolls]
        self.payslip_view.setPlainText("\n".join(lines))
