import os
import json
import logging
from typing import List, Optional
import pandas as pd
from pathlib import Path

logger = logging.getLogger(__name__)


class MessageLoader:
    """Loads raw notification texts from exported message files."""

    SUPPORTED_EXTENSIONS = {'.txt', '.json', '.csv', '.xlsx', '.xls'}

    # Column names that typically hold the message body, in priority order
    MESSAGE_COLUMNS = ['message', 'sms', 'body', 'text', 'content', 'description']

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_file(self, file_path: str) -> List[str]:
        """
        Load notification texts based on file extension.

        Args:
            file_path: Path to the message export

        Returns:
            List of message bodies, blank entries removed
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        file_ext = Path(file_path).suffix.lower()

        if file_ext not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type: {file_ext}")

        self.logger.info(f"Loading {file_ext} file: {file_path}")

        try:
            if file_ext == '.txt':
                messages = self._load_txt(file_path)
            elif file_ext == '.json':
                messages = self._load_json(file_path)
            elif file_ext == '.csv':
                messages = self._messages_from_frame(self._load_csv(file_path))
            else:
                messages = self._messages_from_frame(pd.read_excel(file_path, sheet_name=0))
        except Exception as e:
            self.logger.error(f"Error loading file {file_path}: {str(e)}")
            raise

        self.logger.info(f"Loaded {len(messages)} messages from {file_path}")
        return messages

    def _load_txt(self, file_path: str) -> List[str]:
        """One message per non-blank line."""
        with open(file_path, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip()]

    def _load_json(self, file_path: str) -> List[str]:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise ValueError("JSON message file must contain a list of strings")

        return [item.strip() for item in data if item.strip()]

    def _load_csv(self, file_path: str) -> pd.DataFrame:
        """Load CSV file with robust encoding detection."""
        encodings = ['utf-8', 'utf-8-sig', 'latin1', 'cp1252']

        for encoding in encodings:
            try:
                df = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
                self.logger.info(f"Successfully loaded CSV with {encoding} encoding")
                return df
            except UnicodeDecodeError:
                continue

        raise ValueError(f"Could not decode CSV file with any of the tried encodings: {encodings}")

    def _find_message_column(self, columns: List[str]) -> Optional[str]:
        for name in self.MESSAGE_COLUMNS:
            for col in columns:
                if name in str(col).lower().strip():
                    return col
        return None

    def _messages_from_frame(self, df: pd.DataFrame) -> List[str]:
        """Pull message bodies out of a tabular export."""
        if df.empty:
            return []

        column = self._find_message_column(df.columns.tolist())
        if column is None:
            if len(df.columns) != 1:
                raise ValueError(f"No message column found in: {df.columns.tolist()}")
            column = df.columns[0]

        self.logger.info(f"Using message column: {column}")
        values = df[column].dropna().astype(str).str.strip()
        return [value for value in values if value]
