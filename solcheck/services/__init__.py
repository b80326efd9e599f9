"""
Services behind the solcheck validation pipeline.

Each subpackage owns one stage: staging mirrors sources into the temp
tree, toolchain installs and runs the compiler and linker, compilation
drives both over a job, diagnostics parses their output and validation
schedules passes for open documents.
"""
