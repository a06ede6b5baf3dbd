"""
Golden Master Test Suite for Name Casing and Splitting

This test captures the current behavior of the nameutils engine so that changes to the
particle catalog or the casing rules cannot silently alter the public API output.

Captured per name:
- namecase() in full mode
- split() as (success, "Family, Given" or failure reason, deciding rule)

Known limitations are captured too: a change to them shows up here first.
"""

import sys
import pickle
from pathlib import Path
from typing import Dict, Tuple, Any
import pytest

# Add the parent directory to path to import nameutils
sys.path.insert(0, str(Path(__file__).parent.parent))

from nameutils.names import NameUtils

GoldenResult = Tuple[Any, Tuple[bool, Any, str]]


class GoldenMasterTester:
    """Captures and validates nameutils behavior."""

    def __init__(self):
        self.golden_file = Path(__file__).parent / "golden_master_names.pkl"
        self.engine = NameUtils()

    def capture_golden_master(self, test_cases: list[str]) -> Dict[str, GoldenResult]:
        """Capture the current behavior as golden master."""
        results: Dict[str, GoldenResult] = {}
        for test_case in test_cases:
            try:
                split = self.engine.split(test_case)
                # Convert SplitResult to tuple format for pickling
                results[test_case] = (
                    self.engine.namecase(test_case),
                    (split.success, split.unambiguous if split.success else split.error_message, split.source),
                )
            except Exception as e:
                results[test_case] = (None, (False, f"Exception: {str(e)}", ""))
        return results

    def save_golden_master(self, results: Dict[str, GoldenResult]) -> None:
        """Save golden master results to disk."""
        with open(self.golden_file, "wb") as f:
            pickle.dump(results, f)

    def load_golden_master(self) -> Dict[str, GoldenResult]:
        """Load golden master results from disk."""
        if not self.golden_file.exists():
            return {}
        with open(self.golden_file, "rb") as f:
            return pickle.load(f)

    def validate_against_golden_master(
        self, current_results: Dict[str, GoldenResult], golden_results: Dict[str, GoldenResult]
    ) -> None:
        """Validate current results match golden master."""
        mismatches = []

        for test_case, golden_result in golden_results.items():
            if test_case not in current_results:
                mismatches.append(f"Missing test case: {test_case}")
                continue

            current_result = current_results[test_case]
            if current_result != golden_result:
                mismatches.append(
                    f"Mismatch for '{test_case}':\n" f"  Golden:  {golden_result}\n" f"  Current: {current_result}"
                )

        if mismatches:
            raise AssertionError(
                f"Golden master validation failed with {len(mismatches)} mismatches:\n"
                + "\n".join(mismatches[:10])  # Show first 10 mismatches
            )


# Natural-order names with expected (namecase, namesplit) outcomes
NATURAL_NAME_TEST_CASES = [
    # Germanic and Dutch
    ("Bram van Haag", ("Bram van Haag", "van Haag, Bram")),
    ("bram van haag", ("Bram van Haag", "van Haag, Bram")),
    ("Jan van der Berg", ("Jan van der Berg", "van der Berg, Jan")),
    ("Ursula von der Leyen", ("Ursula von der Leyen", "von der Leyen, Ursula")),
    (
        "Hans-Adam von und zu Liechtenstein",
        ("Hans-Adam von und zu Liechtenstein", "von und zu Liechtenstein, Hans-Adam"),
    ),
    ("Gerrit van 't Hof", ("Gerrit van 't Hof", "van 't Hof, Gerrit")),
    ("Ludwig van Beethoven", ("Ludwig van Beethoven", "van Beethoven, Ludwig")),
    ("Piet ter Horst", ("Piet ter Horst", "ter Horst, Piet")),
    ("Cecilia af Klercker", ("Cecilia af Klercker", "af Klercker, Cecilia")),
    # Romance
    ("Leonardo da Vinci", ("Leonardo da Vinci", "da Vinci, Leonardo")),
    ("María de la Cruz", ("María de la Cruz", "de la Cruz, María")),
    ("Guillermo del Toro", ("Guillermo del Toro", "del Toro, Guillermo")),
    ("Maria dos Santos e Silva", ("Maria dos Santos e Silva", "dos Santos e Silva, Maria")),
    ("Jean d'Alembert", ("Jean d'Alembert", "d'Alembert, Jean")),
    ("Daphne du Maurier", ("Daphne du Maurier", "du Maurier, Daphne")),
    ("Paolo dell'Acqua", ("Paolo dell'Acqua", "dell'Acqua, Paolo")),
    # Gaelic and Irish
    ("Tomás Ó hUiginn", ("Tomás Ó hUiginn", "Ó hUiginn, Tomás")),
    ("Seán Ó Súilleabháin", ("Seán Ó Súilleabháin", "Ó Súilleabháin, Seán")),
    ("Pádraig Mac an tSaoir", ("Pádraig Mac an tSaoir", "Mac an tSaoir, Pádraig")),
    ("Máire Bean Uí Bhriain", ("Máire Bean Uí Bhriain", "Bean Uí Bhriain, Máire")),
    ("Síle Ní Bhraonáin", ("Síle Ní Bhraonáin", "Ní Bhraonáin, Síle")),
    ("ronald mcdonald", ("Ronald McDonald", "McDonald, Ronald")),
    ("mary o'brien", ("Mary O'Brien", "O'Brien, Mary")),
    ("ALEXANDER MACKENZIE", ("Alexander MacKenzie", "MacKenzie, Alexander")),
    ("antonio machado", ("Antonio Machado", "Machado, Antonio")),
    # Arabic and Hebrew
    ("Harun al-Rashid", ("Harun al-Rashid", "al-Rashid, Harun")),
    ("Ahmad ibn Hanbal", ("Ahmad ibn Hanbal", "ibn Hanbal, Ahmad")),
    ("Fatima bint Muhammad", ("Fatima bint Muhammad", "bint Muhammad, Fatima")),
    ("Abdullah bin Abdulaziz al-Saud", ("Abdullah bin Abdulaziz al-Saud", "bin Abdulaziz al-Saud, Abdullah")),
    ("Moshe ben Amram ha-Levi", ("Moshe ben Amram ha-Levi", "ben Amram ha-Levi, Moshe")),
    ("Miriam bat Yosef", ("Miriam bat Yosef", "bat Yosef, Miriam")),
    # Welsh, Polynesian, African
    ("Dafydd ap Gruffydd", ("Dafydd ap Gruffydd", "ap Gruffydd, Dafydd")),
    ("Gwenllian ferch Gruffydd", ("Gwenllian ferch Gruffydd", "ferch Gruffydd, Gwenllian")),
    ("Kiri Te Kanawa", ("Kiri Te Kanawa", "Te Kanawa, Kiri")),
    ("KIRI TE KANAWA", ("Kiri Te Kanawa", "Te Kanawa, Kiri")),
    ("Sipho ka Nkosi", ("Sipho ka Nkosi", "ka Nkosi, Sipho")),
    # No particle
    ("John Smith", ("John Smith", "Smith, John")),
    ("JOHN PAUL SMITH", ("John Paul Smith", "Smith, John Paul")),
    ("Catherine Zeta-Jones", ("Catherine Zeta-Jones", "Zeta-Jones, Catherine")),
    ("Van Morrison", ("Van Morrison", "Morrison, Van")),
]

# Names the heuristic splits incorrectly without an exception; captured by the golden master only
KNOWN_LIMITATION_TEST_CASES = [
    "Martin Van Buren",
    "Dick Van Dyke",
    "Anna De Luca",
    "José Ortega y Gasset",
    "Erling Jonsson til Sudreim",
    "Gabriel García Márquez",
    "Oscar De La Hoya",
]

# Unambiguous and degenerate input
OTHER_TEST_CASES = [
    "MCADAM, SHAUN",
    "o'brian, patrick",
    "d'iapico-bien, maria",
    "VAN DER BERG, JAN",
    "ortega y gasset, josé",
    "Smith,",
    ", John",
    "Cher",
    "",
    "   ",
]

# Combine all test cases - natural names with expected outcomes, the rest just names
TEST_CASES = (
    [name for name, expected in NATURAL_NAME_TEST_CASES] + KNOWN_LIMITATION_TEST_CASES + OTHER_TEST_CASES
)


@pytest.fixture(scope="session")
def golden_master_tester():
    """Create and return a golden master tester instance."""
    return GoldenMasterTester()


def test_natural_names_with_expected_results(golden_master_tester):
    """Test natural-order names with their expected casing and split."""
    passed = 0
    failed = 0
    engine = NameUtils()

    for input_name, expected in NATURAL_NAME_TEST_CASES:
        result = (engine.namecase(input_name), engine.namesplit(input_name))
        if result == expected:
            passed += 1
        else:
            failed += 1
            print(f"FAILED: '{input_name}': expected {expected}, got {result}")

    assert failed == 0, f"Natural name tests: {failed} failures out of {len(NATURAL_NAME_TEST_CASES)} tests"
    print(f"Natural name tests: {passed} passed, {failed} failed")


def test_known_limitations_are_fixed_by_exceptions():
    """Every known limitation is resolved by a split exception plus a case exception."""
    engine = NameUtils()
    engine.namesplit_exception(
        "Van Buren, Martin",
        "Van Dyke, Dick",
        "De Luca, Anna",
        "Ortega y Gasset, José",
        "Jonsson til Sudreim, Erling",
        "García Márquez, Gabriel",
        "De La Hoya, Oscar",
    )

    assert engine.namesplit("Martin Van Buren") == "Van Buren, Martin"
    assert engine.namesplit("DICK VAN DYKE") == "Van Dyke, Dick"
    assert engine.namesplit("Anna De Luca") == "De Luca, Anna"
    assert engine.namesplit("josé ortega y gasset") == "Ortega y Gasset, José"
    assert engine.namesplit("Erling Jonsson til Sudreim") == "Jonsson til Sudreim, Erling"
    assert engine.namesplit("Gabriel García Márquez") == "García Márquez, Gabriel"
    assert engine.namesplit("OSCAR DE LA HOYA") == "De La Hoya, Oscar"

    engine.namecase_exception("Van Buren, Martin")
    assert engine.namecase("MARTIN VAN BUREN") == "Martin Van Buren"
    assert engine.namecase("van buren, martin") == "Van Buren, Martin"


def test_capture_or_validate_golden_master(golden_master_tester):
    """
    Main test that either captures golden master (if none exists)
    or validates current behavior against existing golden master.
    """
    golden_results = golden_master_tester.load_golden_master()
    current_results = golden_master_tester.capture_golden_master(TEST_CASES)

    if not golden_results:
        # First run - capture golden master
        golden_master_tester.save_golden_master(current_results)
        print(f"Captured golden master with {len(current_results)} test cases")
    else:
        # Subsequent runs - validate against golden master
        golden_master_tester.validate_against_golden_master(current_results, golden_results)
        print(f"Validated {len(current_results)} test cases against golden master")


def test_individual_cases(golden_master_tester):
    """Test a few key cases individually for debugging."""
    engine = golden_master_tester.engine
    test_cases = [
        ("Bram van Haag", (True, "van Haag, Bram", "particle")),
        ("Jean d'Alembert", (True, "d'Alembert, Jean", "attached-prefix")),
        ("John Smith", (True, "Smith, John", "last-token")),
        ("MCADAM, SHAUN", (True, "McAdam, Shaun", "unambiguous")),
        ("Cher", (False, "single token", "")),
        ("Smith,", (False, "missing family or given name", "")),
        ("", (False, "empty name", "")),
    ]

    for test_input, expected in test_cases:
        result = engine.split(test_input)
        assert result.success == expected[0], f"For '{test_input}': expected success={expected[0]}, got {result}"
        if result.success:
            assert result.unambiguous == expected[1], f"For '{test_input}': expected '{expected[1]}'"
        else:
            assert result.error_message == expected[1], f"For '{test_input}': got {result.error_message}"
        assert result.source == expected[2]


if __name__ == "__main__":
    # Run directly to capture golden master
    tester = GoldenMasterTester()
    results = tester.capture_golden_master(TEST_CASES)
    tester.save_golden_master(results)
    print(f"Captured golden master with {len(results)} test cases")

    # Print some examples
    for i, (test_case, result) in enumerate(list(results.items())[:10]):
        print(f"  {test_case} -> {result}")
