import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from fnmatch import fnmatch
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from jsonmend.errors import JSONRepairError
from jsonmend.parser import DEFAULT_MAX_DEPTH
from jsonmend.repair import repair_json

DEFAULT_MAX_WORKERS = 4
DEFAULT_PATTERN = "*.json"


class MultiThreadedRepairer:
    def __init__(self, max_workers=DEFAULT_MAX_WORKERS, strict=False, max_depth=DEFAULT_MAX_DEPTH):
        self.max_workers = max_workers
        self.strict = strict
        self.max_depth = max_depth

    def repair_file(self, input_path: str, output_path: Optional[str] = None) -> Dict[str, Any]:
        """Repair a single file, in place unless ``output_path`` is given."""
        filename = os.path.basename(input_path)
        result = {
            "file": filename,
            "status": "ok",
            "changed": False,
            "error": None,
            "position": None,
        }

        try:
            with open(input_path, "r", encoding="utf-8") as f:
                content = f.read()

            repaired = repair_json(content, strict=self.strict, max_depth=self.max_depth)
            result["changed"] = repaired != content

            target = output_path or input_path
            if result["changed"] or target != input_path:
                with open(target, "w", encoding="utf-8") as f:
                    f.write(repaired)

        except JSONRepairError as e:
            result["status"] = "error"
            result["error"] = e.message
            result["position"] = e.position
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {filename}: {e}")
            result["status"] = "error"
            result["error"] = str(e)

        return result

    def repair_directory(
        self,
        directory_path: str,
        output_dir: Optional[str] = None,
        pattern: str = DEFAULT_PATTERN,
    ) -> Dict[str, Any]:
        """Repair every file in ``directory_path`` matching ``pattern`` using multiple threads."""
        if not os.path.isdir(directory_path):
            raise ValueError(f"Directory {directory_path} does not exist")

        file_paths = []
        for filename in sorted(os.listdir(directory_path)):
            file_path = os.path.join(directory_path, filename)
            if os.path.isfile(file_path) and fnmatch(filename, pattern):
                file_paths.append(file_path)

        stats = {
            "total_files": len(file_paths),
            "repaired": 0,
            "unchanged": 0,
            "failed": 0,
            "results": [],
        }

        if not file_paths:
            print("No files found to process")
            return stats

        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        results: List[Dict[str, Any]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {
                executor.submit(
                    self.repair_file,
                    file_path,
                    os.path.join(output_dir, os.path.basename(file_path)) if output_dir else None,
                ): file_path
                for file_path in file_paths
            }

            with tqdm(total=len(file_paths), desc="Repairing files") as pbar:
                for future in as_completed(future_to_file):
                    try:
                        results.append(future.result())
                    finally:
                        pbar.update(1)

        for result in sorted(results, key=lambda r: r["file"]):
            if result["status"] == "error":
                stats["failed"] += 1
            elif result["changed"]:
                stats["repaired"] += 1
            else:
                stats["unchanged"] += 1
            stats["results"].append(result)

        return stats


def run_repair_pipeline(
    directory_path: str,
    output_dir: Optional[str] = None,
    pattern: str = DEFAULT_PATTERN,
    max_workers: int = DEFAULT_MAX_WORKERS,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    repairer = MultiThreadedRepairer(max_workers=max_workers, strict=strict, max_depth=max_depth)
    return repairer.repair_directory(directory_path, output_dir=output_dir, pattern=pattern)
