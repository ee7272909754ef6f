"""Kernel Selector - kernel discovery and switching for notebook sessions.

This package discovers the kernel specifications a notebook server offers,
presents them as ordered menu entries, and drives the protocol for switching
the running kernel of a document session while keeping the presentation
(indicator text, logo, kernel stylesheet) consistent.

Sub-packages:
- protocols/   - Data model (KernelSpec, MenuEntry) and collaborator protocols
- events/      - Typed publish/subscribe bus (selection changed, kernel created)
- catalog/     - Specification registry (fetch, cache, sort)
- switching/   - Switch coordinator state machine
- extensions/  - Per-kernel extension (kernel.js) loader
- ui/          - Presentation hooks and UI synchronizer
- logging/     - structlog configuration and logger injection

Top-level modules:
- bootstrap    - Composition root, KernelSelector facade
- settings     - Environment-driven settings (pydantic-settings)
- errors       - Exception hierarchy
- cli          - Command line entry point

Usage:
    from kernel_selector.bootstrap import create_kernel_selector

    selector = create_kernel_selector(session, document=notebook)
    await selector.start()
    await selector.select("python3")
"""

__version__ = "1.0.0"
