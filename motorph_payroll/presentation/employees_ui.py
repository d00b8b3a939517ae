# motorph_payroll/presentation/employees_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QTableView, QPushButton,
                             QHBoxLayout, QMessageBox, QDialog, QLineEdit, QComboBox,
                             QFormLayout, QDialogButtonBox, QAbstractItemView,
                             QDoubleSpinBox, QSpinBox, QHeaderView, QCheckBox, QDateEdit)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, QDate
from PyQt5.QtGui import QColor

from typing import List, Optional, Any, Dict

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.employee_manager import EmployeeManager
from motorph_payroll.constants import EmploymentStatus
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.date_converter import from_qdate, to_qdate
from motorph_payroll.utils.money import format_peso
import logging

logger = logging.getLogger(__name__)

# --- Custom Table Model for Employees ---
class EmployeeTableModel(QAbstractTableModel):
    def __init__(self, data: Optional[List[EmployeeEntity]] = None, parent=None):
        super().__init__(parent)
        self._data: List[EmployeeEntity] = data if data is not None else []
        self._headers = ["Employee #", "Name", "Position", "Status", "Basic Salary", "Supervisor"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return QVariant()

        row = index.row()
        col = index.column()
        if not (0 <= row < len(self._data)):
            return QVariant()
        employee = self._data[row]

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0:
                return str(employee.id)
            elif col == 1:
                return employee.full_name
            elif col == 2:
                return employee.position or ""
            elif col == 3:
                return employee.status.value
            elif col == 4:
                return format_peso(employee.basic_salary)
            elif col == 5:
                return employee.immediate_supervisor or ""

        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col == 0:
                return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
            if col == 4: # Salary
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter

        elif role == Qt.ItemDataRole.ForegroundRole:
            if employee.status is EmploymentStatus.TERMINATED:
                return QColor(Qt.GlobalColor.gray)

        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[EmployeeEntity]):
        logger.debug(f"Updating employee table model with {len(new_data)} rows.")
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()

    def get_employee_at_row(self, row: int) -> Optional[EmployeeEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None

# --- Add/Edit Employee Dialog ---
class EmployeeDialog(QDialog):
    def __init__(self, employee: Optional[EmployeeEntity] = None, parent=None):
        super().__init__(parent)
        self.employee = employee
        is_edit_mode = employee is not None

        self.setWindowTitle(f"Edit Employee: {employee.full_name}" if is_edit_mode else "Add New Employee")
        self.setMinimumWidth(420)

        layout = QFormLayout(self)

        self.employee_id_spinbox = QSpinBox(self)
        self.employee_id_spinbox.setRange(1, 999999)
        self.first_name_edit = QLineEdit(self)
        self.last_name_edit = QLineEdit(self)
        self.position_edit = QLineEdit(self)
        self.status_combo = QComboBox(self)
        for status in EmploymentStatus:
            self.status_combo.addItem(status.value, status)
        self.basic_salary_spinbox = self._money_spinbox()
        self.rice_spinbox = self._money_spinbox()
        self.phone_spinbox = self._money_spinbox()
        self.clothing_spinbox = self._money_spinbox()
        self.birthday_edit = QDateEdit(self)
        self.birthday_edit.setCalendarPopup(True)
        self.birthday_edit.setDisplayFormat("yyyy-MM-dd")
        self.supervisor_edit = QLineEdit(self)
        self.bonus_checkbox = QCheckBox("Bonus eligible", self)

        if is_edit_mode:
            self.employee_id_spinbox.setValue(employee.id)
            self.employee_id_spinbox.setEnabled(False) # Employee numbers never change
            self.first_name_edit.setText(employee.first_name)
            self.last_name_edit.setText(employee.last_name)
            self.position_edit.setText(employee.position or "")
            self.status_combo.setCurrentIndex(self.status_combo.findData(employee.status))
            self.basic_salary_spinbox.setValue(float(employee.basic_salary))
            self.rice_spinbox.setValue(float(employee.rice_subsidy or 0))
            self.phone_spinbox.setValue(float(employee.phone_allowance or 0))
            self.clothing_spinbox.setValue(float(employee.clothing_allowance or 0))
            self.birthday_edit.setDate(to_qdate(employee.birthday))
            self.supervisor_edit.setText(employee.immediate_supervisor or "")
            self.bonus_checkbox.setChecked(employee.bonus_eligible)
        else:
            self.birthday_edit.setDate(QDate.currentDate())
            self.bonus_checkbox.setChecked(True)

        layout.addRow("Employee #:", self.employee_id_spinbox)
        layout.addRow("First name:", self.first_name_edit)
        layout.addRow("Last name:", self.last_name_edit)
        layout.addRow("Position:", self.position_edit)
        layout.addRow("Status:", self.status_combo)
        layout.addRow("Basic salary:", self.basic_salary_spinbox)
        layout.addRow("Rice subsidy (0 = standard):", self.rice_spinbox)
        layout.addRow("Phone allowance (0 = standard):", self.phone_spinbox)
        layout.addRow("Clothing allowance (0 = standard):", self.clothing_spinbox)
        layout.addRow("Birthday:", self.birthday_edit)
        layout.addRow("Immediate supervisor:", self.supervisor_edit)
        layout.addRow("", self.bonus_checkbox)

        buttons = QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        self.button_box = QDialogButtonBox(buttons, Qt.Orientation.Horizontal, self) # type: ignore
        layout.addWidget(self.button_box)

        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

    def _money_spinbox(self) -> QDoubleSpinBox:
        spinbox = QDoubleSpinBox(self)
        spinbox.setDecimals(2)
        spinbox.setMinimum(0.00)
        spinbox.setMaximum(999999999.99)
        spinbox.setGroupSeparatorShown(True)
        return spinbox

    def get_data(self) -> Optional[Dict[str, Any]]:
        if not self.first_name_edit.text().strip() or not self.last_name_edit.text().strip():
            QMessageBox.warning(self, "Invalid Input", "First and last name cannot be empty.")
            return None

        def optional_amount(spinbox: QDoubleSpinBox):
            return spinbox.value() if spinbox.value() > 0 else None

        return {
            "employee_id": self.employee_id_spinbox.value(),
            "first_name": self.first_name_edit.text().strip(),
            "last_name": self.last_name_edit.text().strip(),
            "position": self.position_edit.text().strip() or None,
            "status": self.status_combo.currentData(),
            "basic_salary": self.basic_salary_spinbox.value(),
            "rice_subsidy": optional_amount(self.rice_spinbox),
            "phone_allowance": optional_amount(self.phone_spinbox),
            "clothing_allowance": optional_amount(self.clothing_spinbox),
            "birthday": from_qdate(self.birthday_edit.date()),
            "immediate_supervisor": self.supervisor_edit.text().strip() or None,
            "bonus_eligible": self.bonus_checkbox.isChecked(),
        }

# --- Main Employees UI Widget ---
class EmployeesUI(QWidget):
    def __init__(self, employee_manager: EmployeeManager, read_only: bool = False, parent=None):
        super().__init__(parent)
        self.employee_manager = employee_manager
        self.read_only = read_only
        self.table_model = EmployeeTableModel()
        self.show_terminated = False
        self._init_ui()
        self.load_employees_data()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)

        self.terminated_filter_checkbox = QCheckBox("Show terminated employees", self)
        self.terminated_filter_checkbox.setChecked(self.show_terminated)
        self.terminated_filter_checkbox.stateChanged.connect(self._on_filter_changed)

        filter_layout = QHBoxLayout()
        filter_layout.addWidget(self.terminated_filter_checkbox)
        filter_layout.addStretch()
        main_layout.addLayout(filter_layout)

        self.table_view = QTableView()
        self.table_view.setModel(self.table_model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)

        header = self.table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch) # Name column
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Add Employee")
        self.edit_button = QPushButton("Edit Employee")
        self.terminate_button = QPushButton("Mark as Terminated")
        self.refresh_button = QPushButton("Refresh")

        self.add_button.clicked.connect(self._open_add_employee_dialog)
        self.edit_button.clicked.connect(self._open_edit_employee_dialog)
        self.terminate_button.clicked.connect(self._terminate_selected_employee)
        self.refresh_button.clicked.connect(self.load_employees_data)

        for button in (self.add_button, self.edit_button, self.terminate_button):
            button.setEnabled(not self.read_only)
            button_layout.addWidget(button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)

        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("EmployeesUI initialized.")

    def _on_filter_changed(self, state: int):
        self.show_terminated = self.terminated_filter_checkbox.isChecked()
        self.load_employees_data()

    def load_employees_data(self):
        logger.debug(f"Loading employees data... (Show terminated: {self.show_terminated})")
        try:
            employees = self.employee_manager.get_all_employees(include_terminated=self.show_terminated)
            self.table_model.update_data(employees)
            logger.info(f"{len(employees)} employees loaded into table.")
        except Exception as e:
            logger.error(f"Error loading employees: {e}", exc_info=True)
            QMessageBox.critical(self, "Load Error", f"Could not load the employee list: {e}")

    def _selected_employee(self) -> Optional[EmployeeEntity]:
        employee = self.table_model.get_employee_at_row(self.table_view.currentIndex().row())
        if employee is None:
            QMessageBox.information(self, "No Selection", "Please select an employee first.")
        return employee

    def _open_add_employee_dialog(self):
        dialog = EmployeeDialog(parent=self)
        if dialog.exec_() == QDialog.DialogCode.Accepted:
            data = dialog.get_data()
            if data:
                try:
                    employee = self.employee_manager.add_employee(**data)
                    QMessageBox.information(self, "Success", f"Employee '{employee.full_name}' added.")
                    self.load_employees_data()
                except ValidationError as ve:
                    QMessageBox.warning(self, "Validation Error", str(ve))
                except Exception as e:
                    logger.error(f"Error adding employee: {e}", exc_info=True)
                    QMessageBox.critical(self, "Error", f"Could not add employee: {e}")

    def _open_edit_employee_dialog(self):
        employee = self._selected_employee()
        if employee is None:
            return

        dialog = EmployeeDialog(employee=employee, parent=self)
        if dialog.exec_() == QDialog.DialogCode.Accepted:
            data = dialog.get_data()
            if data:
                try:
                    updated = self.employee_manager.update_employee_details(**data)
                    QMessageBox.information(self, "Success", f"Employee '{updated.full_name}' updated.")
                    self.load_employees_data()
                except ValidationError as ve:
                    QMessageBox.warning(self, "Validation Error", str(ve))
                except Exception as e:
                    logger.error(f"Error editing employee: {e}", exc_info=True)
                    QMessageBox.critical(self, "Error", f"Could not update employee: {e}")

    def _terminate_selected_employee(self):
        employee = self._selected_employee()
        if employee is None:
            return

        reply = QMessageBox.question(self, "Confirm",
                                     f"Mark '{employee.full_name}' (#{employee.id}) as terminated?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No, # type: ignore
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            try:
                self.employee_manager.terminate_employee(employee.id)
                self.load_employees_data()
            except Exception as e:
                logger.error(f"Error terminating employee {employee.id}: {e}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not update employee status: {e}")
