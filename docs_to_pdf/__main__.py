from docs_to_pdf.cli import cli

if __name__ == "__main__":
    cli()
