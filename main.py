"""Simple entrypoint to run the StyleSync evaluation scenarios locally."""

from evaluation.harness import run_smoke_checks


def main() -> None:
    for line in run_smoke_checks():
        print(line)


if __name__ == "__main__":
    main()
