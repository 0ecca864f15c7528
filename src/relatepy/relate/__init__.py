"""
This package contains the relate operation for linear geometries.

    :mod:`~relatepy.relate.matrix` contains the DE-9IM relation matrix.

    :mod:`~relatepy.relate.turn_ordering` contains the ordering of turns used when
    scanning the turns along one of the geometries.

    :mod:`~relatepy.relate.disjoint_linestrings` handles components of a geometry that
    take part in no turns.

    :mod:`~relatepy.relate.analyser` contains the state machine that converts an
    ordered sequence of turns into entries of the relation matrix.

    :mod:`~relatepy.relate.linear_linear` contains the relate operation itself.

    :mod:`~relatepy.relate.predicates` contains named spatial predicates.

"""
