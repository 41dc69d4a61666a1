"""Constants that we use in multiple modules."""

# Nucleotides
nucleotides = ['A', 'C', 'G', 'T']


# Variant classifications that are considered silent. A MAF read
# without removing them still carries these entries, so they are
# removed again before building the matrix.
silent_variant_classifications = [
    "3'UTR", "5'UTR", "3'Flank", "Targeted_Region", "Silent",
    "Intron", "RNA", "IGR", "Splice_Region", "5'Flank", "lincRNA"]


# Substitutions are referred to by the pyrimidine of the mutated
# Watson-Crick base pair
substitution_conversion = {
    "A>G": "T>C", "T>C": "T>C",
    "C>T": "C>T", "G>A": "C>T",
    "A>T": "T>A", "T>A": "T>A",
    "A>C": "T>G", "T>G": "T>G",
    "C>A": "C>A", "G>T": "C>A",
    "C>G": "C>G", "G>C": "C>G"}

substitution_types = ["C>A", "C>G", "C>T", "T>A", "T>C", "T>G"]


# Trinucleotide contexts canonical order. Order first by mutation,
# then by previous nucleotide and then by next nucleotide.
canonical_types_order = [f"{first}[{mid_from}>{mid_to}]{third}"
                         for mid_from in "CT"
                         for mid_to in "ACGT".replace(mid_from, "")
                         for first in "ACGT"
                         for third in "ACGT"]


# Number of bases up and downstream of the mutated base used to
# estimate the background nucleotide and motif frequencies
flank = 20

# APOBEC target motifs counted in the background windows
tcw_motifs = ("TCA", "TCT")
wga_motifs = ("TGA", "AGA")

# Samples with an APOBEC enrichment score above this value are
# labelled as enriched
enrichment_cutoff = 2


# Raw substitution motifs adding up to each oriented APOBEC event
apobec_motif_events = {
    "tCw_to_A": ["T[C>A]A", "T[C>A]T"],
    "tCw_to_G": ["T[C>G]A", "T[C>G]T"],
    "tCw_to_T": ["T[C>T]A", "T[C>T]T"],
    "wGa_to_C": ["A[G>C]A", "T[G>C]A"],
    "wGa_to_T": ["A[G>T]A", "T[G>T]A"],
    "wGa_to_A": ["A[G>A]A", "T[G>A]A"],
}

# Raw substitution motifs counted as APOBEC mutations in the
# enrichment numerator. This union of tCw and wGa motifs is inherited
# as is.
apobec_enrichment_motifs = ["T[C>G]T", "T[C>G]A", "T[C>T]T", "T[C>T]A",
                            "T[G>C]A", "A[G>C]A", "T[G>A]A", "A[G>A]A"]


# These are the MAF columns the pipeline works with, descriptions
# from https://docs.gdc.cancer.gov/Data/File_Formats/MAF_Format/
maf_column_descriptions = {
    "Tumor_Sample_Barcode": "Barcode of the tumor sample",
    "Chromosome": "Chromosome (e.g., chr1-chr22, chrX, chrY)",
    "Start_Position": "Genomic start coordinate of the mutation",
    "End_Position": "Genomic end coordinate of the mutation",
    "Variant_Classification": "Effect of the mutation on the protein",
    "Variant_Type": "Type of mutation (e.g., SNP, INS, DEL)",
    "Reference_Allele": "Reference allele at the position",
    "Tumor_Seq_Allele2": "Second observed allele in tumor",
}
