"""Data models for trinucleotide matrices and APOBEC enrichment."""

from dataclasses import dataclass, field, asdict
import json
import logging
import math
from pathlib import Path

import pandas as pd

from .constants import flank, enrichment_cutoff
from .locations import location_reference_genome
from .mutational_matrix import to_sigprofiler_format


logger = logging.getLogger(__name__)


@dataclass
class TrinucleotideMatrixConfig:
    """Configuration of a trinucleotide matrix run.

    Attributes
    ----------
    reference_genome : str, Path or SequenceProvider
        Reference genome. A path is opened as an indexed FASTA (and
        closed again at the end of the run); a provider is used as
        given and left open for the caller to release.
    prefix : str or None
        Prefix to add or remove from contig names in the MAF.
    add : bool, default True
        If True the prefix is prepended to the contig names, otherwise
        it is removed from them (literal, not a regular expression).
    ignore_chr : list[str] or None
        Contigs to remove from the analysis, e.g. ``['chrM']``. Names
        are matched as they appear in the MAF, before `prefix` is
        added or removed.
    use_syn : bool, default True
        Whether to include synonymous (silent) variants.
    flank : int, default 20
        Bases up and downstream of each mutation used to estimate the
        background composition.
    enrichment_cutoff : float, default 2
        Samples with APOBEC enrichment above this value are labelled
        as enriched.
    """

    reference_genome: object = location_reference_genome
    prefix: str | None = None
    add: bool = True
    ignore_chr: list[str] | None = None
    use_syn: bool = True
    flank: int = flank
    enrichment_cutoff: float = enrichment_cutoff


@dataclass(frozen=True)
class ContigMismatchReport:
    """Variants dropped because their contig is not in the reference."""

    dropped_contigs: tuple[str, ...] = ()
    n_variants_dropped: int = 0
    maf_contigs: tuple[str, ...] = ()

    @property
    def has_mismatches(self):
        return self.n_variants_dropped > 0


@dataclass(frozen=True)
class ContextMismatch:
    """A variant whose reference allele disagrees with the genome."""

    tumor_sample_barcode: str
    chromosome: str
    start_position: int
    reference_allele: str
    trinucleotide: str


@dataclass(frozen=True)
class ContextIntegrityReport:
    """Variants excluded after the reference allele check."""

    mismatches: tuple[ContextMismatch, ...] = ()

    @property
    def n_mismatches(self):
        return len(self.mismatches)

    def to_frame(self):
        """Return the mismatches as a DataFrame."""
        return pd.DataFrame([asdict(m) for m in self.mismatches],
                            columns=["tumor_sample_barcode",
                                     "chromosome",
                                     "start_position",
                                     "reference_allele",
                                     "trinucleotide"])


@dataclass(frozen=True)
class Diagnostics:
    """Structured warnings collected along a run."""

    n_input_variants: int = 0
    n_snvs: int = 0
    contig_mismatch: ContigMismatchReport = field(
        default_factory=ContigMismatchReport)
    context_integrity: ContextIntegrityReport = field(
        default_factory=ContextIntegrityReport)

    def to_dict(self):
        return {
            "n_input_variants": self.n_input_variants,
            "n_snvs": self.n_snvs,
            "contig_mismatch": asdict(self.contig_mismatch),
            "context_integrity": [
                asdict(m) for m in self.context_integrity.mismatches],
        }


@dataclass(frozen=True)
class ExactTestResult:
    """Outcome of the one-sided Fisher's exact test.

    All fields are NaN when the test is undefined for the table.
    """

    pvalue: float
    odds_ratio: float
    ci_low: float
    ci_high: float

    @property
    def confidence_interval(self):
        return (self.ci_low, self.ci_high)


@dataclass(frozen=True)
class EnrichmentResult:
    """APOBEC enrichment of a single sample."""

    apobec_enrichment_ratio: float
    fisher_pvalue: float
    odds_ratio: float
    confidence_interval: tuple[float, float]
    enriched: bool

    @property
    def is_defined(self):
        return not math.isnan(self.apobec_enrichment_ratio)


@dataclass(repr=False)
class TrinucleotideMatrixResult:
    """Output bundle of :func:`trinucleotide_matrix`.

    Attributes
    ----------
    nmf_matrix : pd.DataFrame
        Samples x 96 integer matrix, columns in
        :data:`constants.canonical_types_order`.
    apobec_scores : pd.DataFrame
        Per-sample mutation counts, background counts (``n_bg_``
        prefix) and APOBEC enrichment columns, sorted by
        ``fisher_pvalue``.
    diagnostics : Diagnostics
        Dropped contigs and reference mismatches.
    """

    nmf_matrix: pd.DataFrame
    apobec_scores: pd.DataFrame
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __repr__(self):
        return (f"TrinucleotideMatrixResult(n_samples={self.n_samples}, "
                f"n_enriched={self.n_enriched}, "
                f"n_variants_dropped="
                f"{self.diagnostics.contig_mismatch.n_variants_dropped}, "
                f"n_context_mismatches="
                f"{self.diagnostics.context_integrity.n_mismatches})")

    @property
    def n_samples(self):
        return self.nmf_matrix.shape[0]

    @property
    def n_enriched(self):
        return int(self.apobec_scores["apobec_enriched"].sum())

    def save(self, directory, force=False):
        """Write the matrix, the scores and a manifest to `directory`.

        Parameters
        ----------
        directory : str or Path
            Output directory, created if needed.
        force : bool, default False
            Overwrite results already present in `directory`.

        Raises
        ------
        FileExistsError
            If results exist and `force` is False.
        """
        directory = Path(directory)
        manifest_path = directory / "manifest.json"

        if manifest_path.exists() and not force:
            raise FileExistsError(
                f"Results already exist at {directory}. "
                "Use force=True to overwrite.")

        directory.mkdir(parents=True, exist_ok=True)

        self.nmf_matrix.to_csv(directory / "nmf_matrix.tsv", sep="\t")
        to_sigprofiler_format(self.nmf_matrix).to_csv(
            directory / "mutational_matrix.SBS96.all", sep="\t",
            index=False)
        self.apobec_scores.to_csv(directory / "apobec_scores.tsv",
                                  sep="\t")

        manifest = {
            "version": 1,
            "files": {
                "nmf_matrix": "nmf_matrix.tsv",
                "sigprofiler_matrix": "mutational_matrix.SBS96.all",
                "apobec_scores": "apobec_scores.tsv",
            },
            "n_samples": self.n_samples,
            "n_enriched": self.n_enriched,
            "diagnostics": self.diagnostics.to_dict(),
        }
        manifest_path.write_text(json.dumps(manifest, indent=2))
        logger.info(f"Saved results to {directory}")
        return directory
