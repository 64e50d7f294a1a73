"""
Pipeline Orchestrator - Rescale Workflow

Wires the layers into one run:
1. Extract: read the input table from a file or URL
2. Transform: quality check, validate, rescale columns onto [0, 1]
3. Validate: every defined rescaled value lies in [0, 1]
4. Load: write the rescaled table (skipped in dry-run mode)
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union
import logging
import polars as pl

# Add src to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.coreutils.env import PipelineSettings

# Extract layer imports
from src.extract.readers import load_source

# Transform layer imports
from src.transformation.transformers import (
    describe_columns,
    find_constant_columns,
    rescale_columns,
    resolve_rescale_columns,
)
from src.transformation.validators import (
    validate_data_quality,
    validate_unit_interval,
)

# Load layer imports
from src.load.local_storage import default_output_path, save_table

logger = logging.getLogger(__name__)


class RescalePipeline:
    """Orchestrates reading, rescaling and saving a table"""

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the pipeline

        Args:
            settings: Runtime settings (read from the environment if not provided)
            dry_run: If true, skip writing output files
        """
        self.settings = settings or PipelineSettings.from_env()
        self.dry_run = dry_run

        if self.dry_run:
            logger.info("🔍 DRY RUN MODE: output files will not be written")

    def run(
        self,
        source: Union[str, Path],
        columns: Optional[Sequence[str]] = None,
        by: Optional[Union[str, Sequence[str]]] = None,
        output_path: Optional[str] = None,
    ) -> dict:
        """
        Rescale the numeric columns of a table and save the result

        Args:
            source: Input file path or URL
            columns: Columns to rescale (default: every numeric column)
            by: Optional grouping column(s) for per-group rescaling
            output_path: Destination file (default: dated parquet in output_dir)

        Returns:
            dict: rows, rescaled columns, constant columns, output path
        """
        logger.info(f"🚀 Starting rescale pipeline for {source}")

        try:
            # Step 1: Extract
            logger.info("🔄 Step 1: Loading input table...")
            df = load_source(source, settings=self.settings)
            logger.info(f"✅ Loaded {df.height} rows, {df.width} columns")

            # Step 2: Validate input
            logger.info("🔄 Step 2: Validating input...")
            validate_data_quality(df)
            columns = resolve_rescale_columns(df, columns, by)
            constant = find_constant_columns(df, columns, by=by)
            for col in constant:
                logger.warning(
                    f"Column '{col}' is constant (within a group), rescaling yields NaN"
                )

            # Step 3: Transform
            logger.info("🔄 Step 3: Rescaling columns...")
            rescaled_df = rescale_columns(df, columns, by=by)

            # Step 4: Validate output, NaN from constant columns/groups is skipped
            logger.info("🔄 Step 4: Validating rescaled values...")
            validate_unit_interval(rescaled_df, columns)

            # Step 5: Load
            saved_path = None
            if not self.dry_run:
                logger.info("🔄 Step 5: Saving rescaled table...")
                target = output_path or default_output_path(
                    source, self.settings.output_dir
                )
                saved_path = save_table(rescaled_df, target)
            else:
                logger.info("🔍 DRY RUN: Skipping save")

            logger.info("✅ Rescale pipeline completed successfully")
            return {
                "rows": rescaled_df.height,
                "rescaled_columns": columns,
                "constant_columns": constant,
                "output_path": saved_path,
                "data": rescaled_df,
            }

        except Exception as e:
            logger.error(f"❌ Rescale pipeline failed: {e}")
            raise

    def describe(
        self, source: Union[str, Path], columns: Optional[Sequence[str]] = None
    ) -> pl.DataFrame:
        """
        Load a table and summarise its numeric columns

        Args:
            source: Input file path or URL
            columns: Columns to describe (default: every numeric column)

        Returns:
            pl.DataFrame: Column summary
        """
        logger.info(f"📊 Describing {source}")
        df = load_source(source, settings=self.settings)
        return describe_columns(df, columns)

    def get_pipeline_status(self) -> dict:
        """
        Get current pipeline status

        Returns:
            dict: Pipeline status information
        """
        return {
            "timestamp": datetime.now().isoformat(),
            "dry_run": self.dry_run,
            "output_dir": self.settings.output_dir,
            "log_dir": self.settings.log_dir,
        }
