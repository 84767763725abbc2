import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from varion import ScriptParser, ScriptParseError

SCRIPT_SUFFIXES = ('.va', '.vion')


def main():
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("ScriptVerification")

    targets = [Path(arg) for arg in sys.argv[1:]] or [Path("examples")]
    paths: list[Path] = []
    for target in targets:
        if target.is_dir():
            paths.extend(sorted(p for p in target.iterdir() if p.suffix in SCRIPT_SUFFIXES))
        else:
            paths.append(target)

    if not paths:
        logger.warning(f"No scripts found in {', '.join(str(t) for t in targets)}")
        return

    parser = ScriptParser()
    failed = 0
    for path in paths:
        try:
            dialogue = parser.parse_file(path)
        except (ScriptParseError, OSError) as e:
            logger.error(f"{path}: {e}")
            failed += 1
            continue

        choices = sum(len(node.choices) for node in dialogue.nodes.values())
        logger.info(f"{path}: {len(dialogue.nodes)} nodes, {choices} choices")

    if failed:
        logger.error(f"VERIFICATION FAILED: {failed} of {len(paths)} scripts did not parse.")
        sys.exit(1)

    logger.info("VERIFICATION SUCCESSFUL: All scripts parsed.")


if __name__ == "__main__":
    main()
