"""
student_records package

Konsolen-Anwendung zur Verwaltung von Studierenden-Datensätzen
in einer Binärdatei mit Blöcken fester Größe.

Schichtenarchitektur:
- validation.py: Prüf-Funktionen (Admission Number, Wertebereiche)
- domain.py: Entity StudentRecord
- persistence.py: Binär-Persistierung (Codec, Datei, Repository)
- store.py: RecordStore (Sammlung, Laden/Speichern/Löschen)
- view.py: Konsolen-Ausgabe
- controller.py: Menü-Orchestrierung
- main.py: Einstiegspunkt
"""
