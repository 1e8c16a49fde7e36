"""In-memory review state: the record collection and the batch dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from client.analyze_client import AnalyzeClient
from client.csv_export import build_csv
from client.file_intake import FileCandidate, prepare_upload
from models.analysis import AnalysisResult
from models.image_record import ImageRecord
from services.thumbnail_generator import ThumbnailGenerator

LOGGER = logging.getLogger(__name__)


class ImageCollection:
	"""Ordered records of one review session.

	`version` increases on every mutation so views can tell when to re-render.
	"""

	def __init__(self) -> None:
		self._records: List[ImageRecord] = []
		self.version = 0

	def __len__(self) -> int:
		return len(self._records)

	def __iter__(self) -> Iterator[ImageRecord]:
		return iter(tuple(self._records))

	@property
	def records(self) -> Tuple[ImageRecord, ...]:
		return tuple(self._records)

	def get(self, record_id: str) -> ImageRecord:
		"""Return a record or raise KeyError if missing."""
		for record in self._records:
			if record.id == record_id:
				return record
		raise KeyError(f"Record {record_id} not found")

	def insert(self, record: ImageRecord) -> ImageRecord:
		"""Append a record; its id must not already be present."""
		if any(existing.id == record.id for existing in self._records):
			raise ValueError(f"Record {record.id} already exists")
		self._records.append(record)
		self.version += 1
		return record

	def update(self, record_id: str, analysis: AnalysisResult) -> ImageRecord:
		"""Attach the analysis to a pending record. A record is analyzed at most once."""
		record = self.get(record_id)
		if record.analysis is not None:
			raise ValueError(f"Record {record_id} already has an analysis")
		record.analysis = analysis
		self.version += 1
		return record

	def remove(self, index: int) -> ImageRecord:
		"""Remove the record at a position of the full list."""
		if not 0 <= index < len(self._records):
			raise IndexError(f"No record at position {index}")
		record = self._records.pop(index)
		self.version += 1
		return record

	def remove_from_group(self, folder_path: str, index: int) -> ImageRecord:
		"""Remove the record at a position within one folder group."""
		group = self.grouped().get(folder_path, [])
		if not 0 <= index < len(group):
			raise IndexError(f"No record at position {index} in group {folder_path!r}")
		return self.remove(self._records.index(group[index]))

	def grouped(self) -> Dict[str, List[ImageRecord]]:
		"""Group records by folder key; groups and their rows keep insertion order."""
		groups: Dict[str, List[ImageRecord]] = {}
		for record in self._records:
			groups.setdefault(record.folder_path, []).append(record)
		return groups


class ReviewSession:
	"""Send files for analysis and collect the results as they arrive."""

	def __init__(
		self,
		api: AnalyzeClient,
		collection: Optional[ImageCollection] = None,
		thumbnails: Optional[ThumbnailGenerator] = None,
	) -> None:
		self.api = api
		self.collection = collection or ImageCollection()
		self.thumbnails = thumbnails or ThumbnailGenerator()
		self._pending: Set[asyncio.Task] = set()

	@property
	def is_analyzing(self) -> bool:
		"""True while any dispatched request, from any batch, is outstanding."""
		return bool(self._pending)

	async def analyze_files(self, candidates: Iterable[FileCandidate]) -> List[ImageRecord]:
		"""Analyze every candidate concurrently and return the records added.

		Records are appended in completion order. A file that fails is logged
		and skipped; the rest of the batch is unaffected.
		"""
		candidates = list(candidates)
		if not candidates:
			return []

		tasks = []
		for candidate in candidates:
			task = asyncio.create_task(self._analyze_one(candidate))
			self._pending.add(task)
			task.add_done_callback(self._pending.discard)
			tasks.append(task)

		results = await asyncio.gather(*tasks)
		added = [record for record in results if record is not None]
		LOGGER.info("Batch finished: %d of %d images analyzed", len(added), len(candidates))
		return added

	async def _analyze_one(self, candidate: FileCandidate) -> Optional[ImageRecord]:
		try:
			upload = await prepare_upload(candidate, self.thumbnails)
			try:
				analysis = await self.api.analyze(upload.data_uri)
			finally:
				upload.release()
		except Exception as exc:  # pylint: disable=broad-exception-caught
			LOGGER.warning("Error analyzing image %s: %s", candidate.file_name, exc)
			return None

		record = ImageRecord(
			file_name=upload.file_name,
			folder_path=upload.folder_path,
			preview=upload.preview,
			analysis=analysis,
		)
		return self.collection.insert(record)

	def remove(self, index: int) -> ImageRecord:
		return self.collection.remove(index)

	def export_csv(self, folder_path: Optional[str] = None) -> str:
		"""Return CSV text for all records, or for one folder group."""
		if folder_path is None:
			records = [record for group in self.collection.grouped().values() for record in group]
		else:
			records = self.collection.grouped().get(folder_path, [])
		return build_csv(records)
