"""Allow running one cycle as: python -m oracle_core.orchestrator {post,reply,sync} [--config path]."""

import argparse

from oracle_core.orchestrator.runner import main

parser = argparse.ArgumentParser(description="Oracle cron cycle")
parser.add_argument("command", choices=["post", "reply", "sync"])
parser.add_argument("--config", default=None, help="Path to config.yaml")
args = parser.parse_args()
main(args.command, config_path=args.config)
