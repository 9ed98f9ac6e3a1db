# scripts/analyze_comments_file.py
import argparse
import logging
import sys
from pathlib import Path

from comment_analyzer.core.config import LOG_LEVEL, load_analysis_config
from comment_analyzer.exceptions import CommentDataError
from comment_analyzer.infra.wordcloud_render import save_wordcloud_png
from comment_analyzer.infra.yaml_io import save_yaml
from comment_analyzer.services.analysis_service import AnalysisService
from comment_analyzer.usecases.analyze_comment_file import run_comment_file_usecase


def main():
    ap = argparse.ArgumentParser(description="Analyze a CSV/Excel/text file of public comments")
    ap.add_argument("--input", required=True, help="CSV, Excel or text file, one comment per row")
    ap.add_argument("--column", default=None, help="comment column (auto-detected when omitted)")
    ap.add_argument("--sheet", default=None, help="Excel sheet name (first sheet when omitted)")
    ap.add_argument("--length", choices=["short", "medium", "long"], default="medium")
    ap.add_argument("--remote", action="store_true", help="try the external API before local analysis")
    ap.add_argument("--output", default=None, help="YAML report path (stdout summary only when omitted)")
    ap.add_argument("--wordcloud", default=None, help="also write a word cloud PNG to this path")
    args = ap.parse_args()

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    service = AnalysisService.from_config(load_analysis_config())
    try:
        report = run_comment_file_usecase(
            service,
            Path(args.input),
            column=args.column,
            sheet=args.sheet,
            use_remote=True if args.remote else None,
            length=args.length,
        )
    except CommentDataError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    stats = report["sentiment"]
    print(f"comments: {stats['total']}  positive: {stats['positive']}  "
          f"negative: {stats['negative']}  neutral: {stats['neutral']}")
    print(f"summary ({report['summary_source']}): {report['summary']}")
    top = ", ".join(f"{w}({c})" for w, c in report["word_frequency"][:10])
    print(f"top words: {top}")

    if args.output:
        save_yaml(Path(args.output), report)
        print(f"report written to {args.output}")

    if args.wordcloud:
        text = "\n".join(c["text"] for c in report["comments"])
        cloud = service.word_cloud(text, seed=0)
        save_wordcloud_png(cloud.nodes, Path(args.wordcloud), cloud.width, cloud.height)
        print(f"word cloud written to {args.wordcloud}")


if __name__ == "__main__":
    main()
