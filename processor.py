"""
Batch traveler validation.

Runs every row of a traveler file through the add-traveler wizard:
1. Load the row into a fresh wizard draft
2. Resolve the city against the gazetteer (Spanish residents)
3. Validate all four steps and collect field errors
4. Submit the valid rows
5. Return a results DataFrame with Status and Error columns
"""

import pandas as pd
import logging

from config import TRAVELER_COLUMNS, GAZETTEER_COUNTRY
from models import WizardStep, TravelerDraft
from utils.normalization import is_blank
from validators.step_validator import validate_step
from wizard import TravelerWizard

logger = logging.getLogger(__name__)

STATUS_VALID = 'Valid'
STATUS_INVALID = 'Invalid'
ERROR_SEPARATOR = ' | '


class TravelerBatchValidator:
    """
    Validates a DataFrame of travelers produced by data_loader.load_travelers.
    """

    def __init__(self, travelers_df, today=None):
        """
        Initialize validator with data.

        Args:
            travelers_df: DataFrame whose columns are draft field names
            today: Reference date for date-of-birth checks (defaults to today)
        """
        self.travelers_df = travelers_df
        self.today = today
        self.fields = [name for name in TravelerDraft.field_names() if name in travelers_df.columns]

        ignored = [col for col in travelers_df.columns if col not in self.fields]
        if ignored:
            logger.info(f"Ignoring unrecognised columns: {ignored}")

    def process(self):
        """
        Validate every row.

        Returns:
            pd.DataFrame: One row per traveler with columns:
                - every traveler column (see config.TRAVELER_COLUMNS)
                - Status ("Valid" / "Invalid")
                - Error (field errors joined with " | ", empty when valid)
        """
        logger.info(f"Validating {len(self.travelers_df)} travelers...")

        results = []
        for idx, row in self.travelers_df.iterrows():
            results.append(self._process_row(idx, row))

        results_df = pd.DataFrame(results, columns=list(TRAVELER_COLUMNS.values()) + ['Status', 'Error'])

        valid_count = int((results_df['Status'] == STATUS_VALID).sum())
        logger.info(f"Validation complete: {valid_count} valid, {len(results_df) - valid_count} invalid")
        return results_df

    def _row_values(self, row):
        values = {}
        for name in self.fields:
            value = row.get(name)
            values[name] = None if is_blank(value) else str(value).strip()
        return values

    def _process_row(self, idx, row):
        wizard = TravelerWizard(today=self.today)
        wizard.open()

        values = self._row_values(row)
        city = values.pop('city', None)
        wizard.update(**values)
        self._resolve_city(wizard, city)

        errors = {}
        for step in WizardStep:
            errors.update(validate_step(step, wizard.draft, today=self.today))

        draft_snapshot = self._draft_values(wizard.draft)

        if errors:
            logger.debug(f"Row {idx}: {len(errors)} error(s)")
            return self._result_row(draft_snapshot, STATUS_INVALID, self._format_errors(errors))

        for _ in range(len(WizardStep) - 1):
            wizard.next()
        traveler = wizard.submit()

        return self._result_row(traveler.to_dict(), STATUS_VALID, '')

    def _resolve_city(self, wizard, city):
        """Let the city input correct spellings for Spanish residents."""
        if city is None or wizard.draft.residence_country != GAZETTEER_COUNTRY or wizard.draft.ine_code:
            wizard.update(city=city)
            return

        city_input = wizard.city_input()
        city_input.reconcile(city)

    @staticmethod
    def _draft_values(draft):
        values = {}
        for name in TravelerDraft.field_names():
            value = getattr(draft, name)
            values[name] = getattr(value, 'value', value)
        return values

    @staticmethod
    def _format_errors(errors):
        parts = []
        for field_name, message in errors.items():
            parts.append(f"{TRAVELER_COLUMNS.get(field_name, field_name)}: {message}")
        return ERROR_SEPARATOR.join(parts)

    @staticmethod
    def _result_row(values, status, error):
        result = {header: values.get(field_name) for field_name, header in TRAVELER_COLUMNS.items()}
        result['Status'] = status
        result['Error'] = error
        return result
