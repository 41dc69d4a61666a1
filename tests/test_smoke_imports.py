"""Smoke tests for importability and basic public API."""


def test_import_trinucmat():
    """Import the top-level package."""
    import trinucmat  # noqa: F401


def test_public_api_symbols():
    """Expose core public symbols at package level."""
    import trinucmat

    assert hasattr(trinucmat, "trinucleotide_matrix")
    assert hasattr(trinucmat, "TrinucleotideMatrixConfig")
    assert hasattr(trinucmat, "InMemorySequenceProvider")
    assert hasattr(trinucmat, "locations")


def test_can_import_core_modules():
    """Import core modules without side effects raising."""
    from trinucmat import apobec_enrichment  # noqa: F401
    from trinucmat import extract_contexts  # noqa: F401
    from trinucmat import locations  # noqa: F401
    from trinucmat import models  # noqa: F401


def test_check_data_status(capsys):
    """Print the status of the reference data without failing."""
    from trinucmat.locations import list_data_files, print_data_status

    assert set(list_data_files()) == {"reference_genome"}
    print_data_status()
    assert "reference_genome" in capsys.readouterr().out
