"""
User interface for the PassKeeper password manager.

The screen keeps all credentials in a CredentialStore for the lifetime of the
window. Passwords are masked unless the user explicitly reveals them.
"""

import logging
from typing import List, Optional
from PyQt5.QtWidgets import (
    QMainWindow, QDialog, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QFormLayout, QLabel, QLineEdit, QPushButton, QMessageBox, QGroupBox,
    QSpinBox, QDialogButtonBox, QAction, QApplication, QScrollArea, QFrame
)
from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QFont

from .storage import CredentialStore, Credential
from .generator import generate_password, check_strength
from . import config

logger = logging.getLogger(__name__)


class PasswordGeneratorDialog(QDialog):
    """Dialog for generating passwords."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.generated_password = ""
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Password Generator")
        self.setModal(True)

        layout = QVBoxLayout()

        # Options
        options_group = QGroupBox("Options")
        options_layout = QGridLayout()

        options_layout.addWidget(QLabel("Length:"), 0, 0)
        self.length_spin = QSpinBox()
        self.length_spin.setMinimum(config.PASSWORD_GENERATOR_MIN_LENGTH)
        self.length_spin.setMaximum(config.PASSWORD_GENERATOR_MAX_LENGTH)
        self.length_spin.setValue(config.PASSWORD_GENERATOR_DEFAULT_LENGTH)
        self.length_spin.valueChanged.connect(self.generate_password)
        options_layout.addWidget(self.length_spin, 0, 1)

        options_layout.addWidget(QLabel(f"Characters: A-Z a-z 0-9 {config.PASSWORD_GENERATOR_SYMBOLS}"), 1, 0, 1, 2)

        options_group.setLayout(options_layout)
        layout.addWidget(options_group)

        # Generated password
        password_group = QGroupBox("Generated Password")
        password_layout = QVBoxLayout()

        self.password_display = QLineEdit()
        self.password_display.setReadOnly(True)
        self.password_display.setFont(QFont("Consolas", 12))
        password_layout.addWidget(self.password_display)

        button_layout = QHBoxLayout()
        self.regenerate_button = QPushButton("Regenerate")
        self.regenerate_button.clicked.connect(self.generate_password)
        button_layout.addWidget(self.regenerate_button)

        self.copy_button = QPushButton("Copy to Clipboard")
        self.copy_button.clicked.connect(self.copy_password)
        button_layout.addWidget(self.copy_button)

        password_layout.addLayout(button_layout)
        password_group.setLayout(password_layout)
        layout.addWidget(password_group)

        # Dialog buttons
        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

        # Generate initial password
        self.generate_password()

    def generate_password(self):
        """Generate a new password with the selected length."""
        self.generated_password = generate_password(self.length_spin.value())
        self.password_display.setText(self.generated_password)

    def copy_password(self):
        """Copy generated password to clipboard."""
        clipboard = QApplication.clipboard()
        clipboard.setText(self.generated_password)

        # Show temporary notification
        self.copy_button.setText("Copied!")
        QTimer.singleShot(1000, lambda: self.copy_button.setText("Copy to Clipboard"))

    def get_password(self) -> str:
        """Get the generated password."""
        return self.generated_password


class CredentialCard(QFrame):
    """Card showing one stored credential."""

    edit_requested = pyqtSignal(str)
    delete_requested = pyqtSignal(str)
    copy_username_requested = pyqtSignal(str)
    copy_password_requested = pyqtSignal(str)

    def __init__(self, entry_id: str, credential: Credential, parent=None):
        super().__init__(parent)
        self.entry_id = entry_id
        self.credential = credential
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setFrameShape(QFrame.StyledPanel)

        layout = QVBoxLayout()
        layout.setContentsMargins(12, 12, 12, 12)

        self.site_label = QLabel(f"🌐 {self.credential.site}")
        site_font = self.site_label.font()
        site_font.setPointSize(site_font.pointSize() + 3)
        site_font.setBold(True)
        self.site_label.setFont(site_font)
        layout.addWidget(self.site_label)

        self.username_label = QLabel(f"👤 {self.credential.username}")
        layout.addWidget(self.username_label)

        self.password_label = QLabel(f"🔒 {config.PASSWORD_HIDDEN_TEXT}")
        self.password_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.password_label)

        buttons_layout = QHBoxLayout()

        self.show_password_button = QPushButton("Show")
        self.show_password_button.setCheckable(True)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        buttons_layout.addWidget(self.show_password_button)

        buttons_layout.addStretch()

        copy_user_btn = QPushButton("📋")
        copy_user_btn.setToolTip("Copy username")
        copy_user_btn.setMaximumWidth(30)
        copy_user_btn.clicked.connect(lambda: self.copy_username_requested.emit(self.entry_id))
        buttons_layout.addWidget(copy_user_btn)

        copy_pass_btn = QPushButton("🔑")
        copy_pass_btn.setToolTip("Copy password")
        copy_pass_btn.setMaximumWidth(30)
        copy_pass_btn.clicked.connect(lambda: self.copy_password_requested.emit(self.entry_id))
        buttons_layout.addWidget(copy_pass_btn)

        self.edit_button = QPushButton("✏️")
        self.edit_button.setToolTip("Edit")
        self.edit_button.setMaximumWidth(30)
        self.edit_button.clicked.connect(lambda: self.edit_requested.emit(self.entry_id))
        buttons_layout.addWidget(self.edit_button)

        self.delete_button = QPushButton("🗑️")
        self.delete_button.setToolTip("Delete")
        self.delete_button.setMaximumWidth(30)
        self.delete_button.clicked.connect(lambda: self.delete_requested.emit(self.entry_id))
        buttons_layout.addWidget(self.delete_button)

        layout.addLayout(buttons_layout)
        self.setLayout(layout)

    def toggle_password_visibility(self, checked: bool):
        """Toggle password visibility."""
        if checked:
            self.password_label.setText(f"🔒 {self.credential.password}")
            self.show_password_button.setText("Hide")
        else:
            self.password_label.setText(f"🔒 {config.PASSWORD_HIDDEN_TEXT}")
            self.show_password_button.setText("Show")


class PasswordManagerScreen(QWidget):
    """Form, search field and credential list bound to a CredentialStore."""

    status_message = pyqtSignal(str)

    def __init__(self, store: CredentialStore, parent=None):
        super().__init__(parent)
        self.store = store
        self.editing_id: Optional[str] = None
        self.cards: List[CredentialCard] = []
        self.clipboard_timer = QTimer(self)
        self.clipboard_timer.setSingleShot(True)
        self.clipboard_timer.timeout.connect(self.clear_clipboard)
        self._copied_password: Optional[str] = None
        self.init_ui()
        self.store.subscribe(self._on_store_changed)
        self.refresh()

    def init_ui(self):
        """Initialize the user interface."""
        layout = QVBoxLayout()

        # Entry form
        form_layout = QFormLayout()

        self.site_input = QLineEdit()
        form_layout.addRow("Site:", self.site_input)

        self.username_input = QLineEdit()
        form_layout.addRow("Username:", self.username_input)

        password_layout = QHBoxLayout()
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.textChanged.connect(self.update_strength_label)
        password_layout.addWidget(self.password_input)

        self.show_password_button = QPushButton("Show")
        self.show_password_button.setCheckable(True)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        password_layout.addWidget(self.show_password_button)

        self.generate_button = QPushButton("Generate")
        self.generate_button.clicked.connect(self.fill_generated_password)
        password_layout.addWidget(self.generate_button)

        form_layout.addRow("Password:", password_layout)

        self.strength_label = QLabel("")
        form_layout.addRow("", self.strength_label)

        layout.addLayout(form_layout)

        save_layout = QHBoxLayout()
        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self.save_entry)
        save_layout.addWidget(self.save_button)

        self.cancel_edit_button = QPushButton("Cancel")
        self.cancel_edit_button.clicked.connect(self.cancel_edit)
        self.cancel_edit_button.setVisible(False)
        save_layout.addWidget(self.cancel_edit_button)
        layout.addLayout(save_layout)

        # Search
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search entries...")
        self.search_input.textChanged.connect(self.refresh)
        layout.addWidget(self.search_input)

        # Credential list
        self.list_widget = QWidget()
        self.list_layout = QVBoxLayout()
        self.list_layout.setAlignment(Qt.AlignTop)
        self.list_widget.setLayout(self.list_layout)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self.list_widget)
        layout.addWidget(scroll_area)

        self.setLayout(layout)

    def _on_store_changed(self, event: str, index: int):
        self.refresh()

    def refresh(self):
        """Rebuild the credential cards from the store and search text.

        Cards whose password was revealed stay revealed if their entry
        is still listed.
        """
        revealed_ids = {card.entry_id for card in self.cards if card.show_password_button.isChecked()}
        for card in self.cards:
            self.list_layout.removeWidget(card)
            card.deleteLater()
        self.cards = []

        for index, credential in self.store.search(self.search_input.text()):
            card = CredentialCard(self.store.id_at(index), credential)
            card.edit_requested.connect(self.start_edit)
            card.delete_requested.connect(self.delete_entry)
            card.copy_username_requested.connect(self.copy_username)
            card.copy_password_requested.connect(self.copy_password)
            if card.entry_id in revealed_ids:
                card.show_password_button.setChecked(True)
            self.list_layout.addWidget(card)
            self.cards.append(card)

    def toggle_password_visibility(self, checked: bool):
        """Toggle password input visibility."""
        if checked:
            self.password_input.setEchoMode(QLineEdit.Normal)
            self.show_password_button.setText("Hide")
        else:
            self.password_input.setEchoMode(QLineEdit.Password)
            self.show_password_button.setText("Show")

    def update_strength_label(self):
        """Show the strength hint for the current password input."""
        password = self.password_input.text()
        if not password:
            self.strength_label.setText("")
            return
        is_strong, message = check_strength(password)
        self.strength_label.setText(message)
        self.strength_label.setStyleSheet("color: green;" if is_strong else "color: orange;")

    def fill_generated_password(self):
        """Fill the password input with a freshly generated password."""
        self.password_input.setText(generate_password())

    def open_generator_dialog(self):
        """Open password generator dialog."""
        dialog = PasswordGeneratorDialog(self)
        if dialog.exec_():
            self.password_input.setText(dialog.get_password())

    def save_entry(self):
        """Validate the form and add or update a credential."""
        site = self.site_input.text().strip()
        username = self.username_input.text().strip()
        password = self.password_input.text()

        if not site or not username or not password.strip():
            logger.warning("Rejected credential with blank fields")
            QMessageBox.warning(self, "Validation Error", "Site, username and password are required")
            return

        credential = Credential(site=site, username=username, password=password)
        if self.editing_id is not None:
            if self.store.replace_by_id(self.editing_id, credential):
                self.status_message.emit("Entry updated")
            else:
                QMessageBox.warning(self, "Error", "The entry being edited no longer exists.")
        else:
            self.store.insert(credential)
            self.status_message.emit("Entry added")

        self.reset_form()

    def start_edit(self, entry_id: str):
        """Load a credential into the form for editing."""
        credential = self.store.get(entry_id)
        if credential is None:
            return
        self.site_input.setText(credential.site)
        self.username_input.setText(credential.username)
        self.password_input.setText(credential.password)
        self.editing_id = entry_id
        self.save_button.setText("Update")
        self.cancel_edit_button.setVisible(True)

    def cancel_edit(self):
        """Leave edit mode without changing the store."""
        self.reset_form()

    def reset_form(self):
        """Clear the form and leave edit mode."""
        self.site_input.clear()
        self.username_input.clear()
        self.password_input.clear()
        self.show_password_button.setChecked(False)
        self.editing_id = None
        self.save_button.setText("Save")
        self.cancel_edit_button.setVisible(False)

    def delete_entry(self, entry_id: str):
        """Delete a credential after confirmation."""
        credential = self.store.get(entry_id)
        if credential is None:
            return

        reply = QMessageBox.question(
            self, "Confirm Delete",
            config.DELETE_CONFIRMATION_TEXT.format(site=credential.site),
            QMessageBox.Yes | QMessageBox.No
        )

        if reply == QMessageBox.Yes:
            if entry_id == self.editing_id:
                self.reset_form()
            if self.store.remove_by_id(entry_id):
                self.status_message.emit("Entry deleted")

    def copy_username(self, entry_id: str):
        """Copy username to clipboard."""
        credential = self.store.get(entry_id)
        if credential:
            QApplication.clipboard().setText(credential.username)
            self.status_message.emit("Username copied to clipboard")

    def copy_password(self, entry_id: str):
        """Copy password to clipboard with auto-clear."""
        credential = self.store.get(entry_id)
        if not credential:
            return
        QApplication.clipboard().setText(credential.password)
        self._copied_password = credential.password

        if config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT > 0:
            self.clipboard_timer.stop()
            self.clipboard_timer.start(config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT)
            self.status_message.emit(
                f"Password copied to clipboard (auto-clear in {config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS}s)"
            )
        else:
            self.status_message.emit("Password copied to clipboard")

    def clear_clipboard(self):
        """Clear the clipboard if it still holds the copied password."""
        clipboard = QApplication.clipboard()
        if self._copied_password is not None and clipboard.text() == self._copied_password:
            clipboard.clear()
            self.status_message.emit("Clipboard cleared")
        self._copied_password = None

    def shutdown(self):
        """Stop timers, clear a copied password and detach from the store."""
        self.clipboard_timer.stop()
        self.clear_clipboard()
        self.store.unsubscribe(self._on_store_changed)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, store: CredentialStore):
        super().__init__()
        self.store = store
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(config.APP_TITLE_PREFIX)
        self.setGeometry(*config.WINDOW_GEOMETRY)

        # Create menu bar
        self.create_menu_bar()

        self.manager_screen = PasswordManagerScreen(self.store)
        self.manager_screen.status_message.connect(self.show_status)
        self.setCentralWidget(self.manager_screen)

        # Total password count
        self.count_label = QLabel("Total Passwords: 0")
        self.count_label.setStyleSheet("padding-right: 10px;")
        self.statusBar().addPermanentWidget(self.count_label)

        self.store.subscribe(self._on_store_changed)
        self.update_entry_count()

    def create_menu_bar(self):
        """Create the menu bar."""
        menubar = self.menuBar()

        menu = menubar.addMenu("Menu")

        home_action = QAction("Home", self)
        home_action.triggered.connect(self.go_home)
        menu.addAction(home_action)

        generator_action = QAction("Password Generator...", self)
        generator_action.setShortcut("Ctrl+G")
        generator_action.triggered.connect(self.show_password_generator)
        menu.addAction(generator_action)

        find_duplicates_action = QAction("Find Duplicates...", self)
        find_duplicates_action.triggered.connect(self.show_find_duplicates)
        menu.addAction(find_duplicates_action)

        menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        menu.addAction(exit_action)

    def go_home(self):
        """Return to the unfiltered list with an empty form."""
        self.manager_screen.search_input.clear()
        self.manager_screen.reset_form()

    def show_password_generator(self):
        """Show the password generator dialog."""
        self.manager_screen.open_generator_dialog()

    def show_find_duplicates(self):
        """List credentials that share site and username."""
        groups = self.store.find_duplicates()
        if not groups:
            QMessageBox.information(self, "Find Duplicates", "No duplicate entries found.")
            return
        lines = []
        for group in groups:
            first = self.store[group[0]]
            lines.append(f"{first.site} / {first.username}: {len(group)} entries")
        QMessageBox.information(self, "Find Duplicates", "\n".join(lines))

    def _on_store_changed(self, event: str, index: int):
        self.update_entry_count()

    def update_entry_count(self):
        """Update the total password count label."""
        self.count_label.setText(f"Total Passwords: {len(self.store)}")

    def show_status(self, message: str):
        """Show a transient status bar message."""
        self.statusBar().showMessage(message, config.STATUS_MESSAGE_TIMEOUT)

    def closeEvent(self, event):
        """Handle window close event."""
        self.manager_screen.shutdown()
        self.store.unsubscribe(self._on_store_changed)
        event.accept()
