"""Graph core: manifest store, graph builder, classifier, lints and rendering."""
