from sumtree.core.hasher import available_algorithms

ALGORITHM_CHOICES = available_algorithms()

DEFAULT_ALGORITHM = ALGORITHM_CHOICES[0]

INPUT_HELP_TEXT = (
    "One or more file names, one directory name (every file recursively will be hashed,\n"
    "in depth first order), or '-' for getting the list of files from stdin (order is conserved)"
)

ALGORITHM_HELP_TEXT = (
    "Hash algorithm:\n"
    "  xxh64, xxh3_64, xxh128     : xxHash family (fast, non-cryptographic)\n"
    "  md5, sha1                  : legacy, match md5sum/sha1sum output\n"
    "  sha256, sha512             : SHA-2, match sha256sum/sha512sum output\n"
    "  blake2b, blake2s           : BLAKE2\n"
    f"Default: {DEFAULT_ALGORITHM}\n"
)

SEPARATOR_HELP_TEXT = (
    "Separator. Defaults to tab unless --compatible is given.\n"
    "Use \"\\t\" for tab and \"\\0\" for null (cannot be mixed with other characters)"
)

COMPATIBLE_HELP_TEXT = (
    "\"Compatible mode\": print the hash first and change the default separator to\n"
    "double-space, as used by system utilities like md5sum"
)

EPILOG_TEXT = """
Examples:
  Hash every file under a directory, depth first
  %(prog)s ~/Downloads

  Output readable by sha256sum -c
  %(prog)s -a sha256 --compatible ~/Downloads > SHA256SUMS

  Hash a list of files produced by another tool, keeping its order
  find ~/Downloads -name '*.iso' | %(prog)s -

  Short digests, null-separated, 16 hashing threads, no progress
  %(prog)s -d 16 -s '\\0' -t 16 -q ~/Downloads
"""
