# site_crawler/report/json_report.py

"""
Генерация JSON-отчёта со статистикой обхода SiteCrawler.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from site_crawler.crawler.models import CrawlStats


def render_json(stats: CrawlStats, output_path: Path | str, seeds: Iterable[str] = ()) -> Path:
    """
    Сохраняет статистику обхода в формате JSON по указанному пути.

    :param stats: объект CrawlStats, который вернул Dispatcher.run()
    :param output_path: путь к JSON-файлу
    :param seeds: стартовые URL, попадают в отчёт как есть
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'generated_at': datetime.now(timezone.utc).isoformat(timespec='seconds'),
        'seeds': list(seeds),
        'stats': stats.as_dict(),
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
